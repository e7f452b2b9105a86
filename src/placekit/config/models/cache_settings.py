"""Cache configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from placekit.shared.constants import CacheDefaults


class CacheSettings(BaseModel):
    """In-memory lookup cache configuration."""

    enabled: bool = Field(default=True, description="Enable caching")
    max_size: int = Field(
        default=CacheDefaults.MAX_SIZE,
        gt=0,
        description="Maximum number of cached lookup results",
    )


__all__ = ["CacheSettings"]
