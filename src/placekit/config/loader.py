"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance used by the CLI

Library classes never call into this module; they receive their
configuration explicitly.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from placekit.config.models.settings import Settings
from placekit.shared.constants import FileSystem
from placekit.shared.errors import create_config_error

logger = logging.getLogger(__name__)

# Plain variable accepted as a shortcut for PLACEKIT_API__PLACEKEY__API_KEY
API_KEY_ENV_VAR = "PLACEKEY_API_KEY"


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self, config_path: str | Path | None = None) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings(config_path)

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Force a reload from the environment and configuration files."""
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance

    def reset(self) -> None:
        with self._lock:
            self._instance = None


def _load_env_file(env_file: Path | None = None) -> None:
    """Load a .env file if one exists. Existing variables win."""
    env_file = env_file or Path(FileSystem.ENV_FILE)
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def _apply_api_key_shortcut(settings: Settings) -> Settings:
    api_key = os.getenv(API_KEY_ENV_VAR, "").strip()
    if api_key and not settings.api.placekey.api_key:
        settings.api.placekey.api_key = api_key
    return settings


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. If None, the default
            locations are tried before falling back to environment only.

    Raises:
        ApplicationError: If the configuration fails validation
    """
    _load_env_file()

    try:
        if config_path:
            return _apply_api_key_shortcut(Settings.from_toml_file(config_path))

        default_config_paths = [
            Path("config") / FileSystem.CONFIG_FILE,
            Path("placekit.toml"),
            Path.home() / FileSystem.HOME_DIR / FileSystem.CONFIG_FILE,
        ]
        for path in default_config_paths:
            if path.exists():
                return _apply_api_key_shortcut(Settings.from_toml_file(path))

        return _apply_api_key_shortcut(Settings())
    except ValidationError as e:
        raise create_config_error(
            f"Invalid configuration: {e}",
            config_key=str(config_path) if config_path else None,
            operation="load_settings",
            original_error=e,
        ) from e


# Global loader instance
_loader = SettingsLoader()


def get_config(config_path: str | Path | None = None) -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config(config_path)


def reload_config(config_path: str | Path | None = None) -> Settings:
    return _loader.reload_config(config_path)
