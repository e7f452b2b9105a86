"""placekit Configuration Module

- Settings: main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: API, cache, batch and logging settings
"""

from __future__ import annotations

from .loader import SettingsLoader, get_config, load_settings, reload_config
from .models import (
    APISettings,
    BatchSettings,
    CacheSettings,
    LoggingSettings,
    PlacekeyAPISettings,
    Settings,
)

__all__ = [
    "APISettings",
    "BatchSettings",
    "CacheSettings",
    "LoggingSettings",
    "PlacekeyAPISettings",
    "Settings",
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
]
