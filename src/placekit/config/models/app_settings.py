"""Batch and logging configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from placekit.shared.constants import BatchDefaults, Logging, QueryConfig


class BatchSettings(BaseModel):
    """Batch processing configuration."""

    batch_size: int = Field(
        default=BatchDefaults.BATCH_SIZE,
        gt=0,
        le=QueryConfig.MAX_BATCH_SIZE,
        description="Records per chunk",
    )


class LoggingSettings(BaseModel):
    """Logging configuration.

    This class manages the level and the optional JSON-lines file output.
    """

    level: str = Field(default=Logging.DEFAULT_LEVEL, description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON-lines log file path")
    console_output: bool = Field(default=True, description="Use rich console output")


__all__ = [
    "BatchSettings",
    "LoggingSettings",
]
