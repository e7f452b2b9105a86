"""Configuration domain models."""

from __future__ import annotations

from .api_settings import APISettings, PlacekeyAPISettings
from .app_settings import BatchSettings, LoggingSettings
from .cache_settings import CacheSettings
from .settings import Settings

__all__ = [
    "APISettings",
    "BatchSettings",
    "CacheSettings",
    "LoggingSettings",
    "PlacekeyAPISettings",
    "Settings",
]
