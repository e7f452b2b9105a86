"""API configuration models.

This module contains configuration models for the remote placekey
resolution service.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from placekit.shared.constants import NetworkConfig, RateLimitConfig


class PlacekeyAPISettings(BaseModel):
    """Resolution API configuration.

    Security: api_key is masked in __repr__ so it never reaches the logs.
    """

    # API authentication (sensitive - hidden from repr)
    api_key: str = Field(
        default="",
        repr=False,
        description="Placekey API key (required for lookups)",
    )
    base_url: str = Field(
        default=NetworkConfig.BASE_URL,
        description="Base URL of the resolution API",
    )
    datasets_url: str = Field(
        default=NetworkConfig.PUBLIC_DATASETS_URL,
        description="Base URL of the public dataset endpoints",
    )

    # Request settings
    timeout: float = Field(
        default=NetworkConfig.READ_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )
    user_agent_comment: str | None = Field(
        default=None,
        description="Optional comment appended to the User-Agent header",
    )

    # Retry settings
    max_retries: int = Field(
        default=NetworkConfig.DEFAULT_MAX_RETRIES,
        ge=0,
        description="Retries for rate limited or failed transport attempts",
    )
    retry_base_delay: float = Field(
        default=NetworkConfig.RETRY_BASE_DELAY,
        ge=0,
        description="Backoff base; attempt n sleeps 2**n times this value",
    )

    # Rate limiting settings
    single_limit: int = Field(default=RateLimitConfig.SINGLE_REQUEST_LIMIT, gt=0)
    single_period: float = Field(default=RateLimitConfig.SINGLE_REQUEST_WINDOW, gt=0)
    bulk_limit: int = Field(default=RateLimitConfig.BULK_REQUEST_LIMIT, gt=0)
    bulk_period: float = Field(default=RateLimitConfig.BULK_REQUEST_WINDOW, gt=0)
    dataset_limit: int = Field(default=RateLimitConfig.DATASET_REQUEST_LIMIT, gt=0)
    dataset_period: float = Field(default=RateLimitConfig.DATASET_REQUEST_WINDOW, gt=0)

    def __repr__(self) -> str:
        masked_key = "****" if self.api_key else "[empty]"
        return (
            f"PlacekeyAPISettings("
            f"api_key={masked_key}, "
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}, "
            f"max_retries={self.max_retries})"
        )


class APISettings(BaseModel):
    """API configuration container.

    Note: Environment variable loading is handled by the parent Settings class.
    """

    placekey: PlacekeyAPISettings = Field(
        default_factory=PlacekeyAPISettings,
        description="Placekey resolution API configuration",
    )


__all__ = [
    "APISettings",
    "PlacekeyAPISettings",
]
