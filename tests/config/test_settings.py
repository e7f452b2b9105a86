"""Tests for settings models and the settings loader."""

from __future__ import annotations

import os

import pytest

from placekit.config.loader import SettingsLoader, load_settings
from placekit.config.models import PlacekeyAPISettings, Settings
from placekit.shared.errors import ApplicationError, ErrorCode


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate from the caller's environment and working directory."""
    for name in ("PLACEKEY_API_KEY", "PLACEKIT_API__PLACEKEY__API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
    return tmp_path


class TestSettingsModel:
    """Defaults, validation and environment overrides."""

    def test_defaults(self, clean_env):
        settings = Settings()

        assert settings.api.placekey.api_key == ""
        assert settings.api.placekey.max_retries == 20
        assert settings.api.placekey.base_url == "https://api.placekey.io/v1"
        assert settings.cache.enabled is True
        assert settings.batch.batch_size == 100

    def test_nested_environment_override(self, clean_env, monkeypatch):
        monkeypatch.setenv("PLACEKIT_API__PLACEKEY__MAX_RETRIES", "5")
        monkeypatch.setenv("PLACEKIT_CACHE__ENABLED", "false")

        settings = Settings()

        assert settings.api.placekey.max_retries == 5
        assert settings.cache.enabled is False

    def test_batch_size_is_capped(self):
        with pytest.raises(ValueError):
            Settings(batch={"batch_size": 101})

    def test_api_key_is_masked_in_repr(self):
        config = PlacekeyAPISettings(api_key="super-secret")

        assert "super-secret" not in repr(config)
        assert "****" in repr(config)
        assert "super-secret" not in repr(Settings(api={"placekey": {"api_key": "super-secret"}}))

    def test_toml_round_trip(self, clean_env):
        path = clean_env / "nested" / "config.toml"
        original = Settings(
            api={"placekey": {"api_key": "k", "timeout": 5.0}},
            cache={"max_size": 42},
        )

        original.to_toml_file(path)
        loaded = Settings.from_toml_file(path)

        assert loaded.api.placekey.api_key == "k"
        assert loaded.api.placekey.timeout == 5.0
        assert loaded.cache.max_size == 42

    def test_missing_toml_file(self, clean_env):
        with pytest.raises(FileNotFoundError):
            Settings.from_toml_file(clean_env / "absent.toml")


class TestLoader:
    """Loading order and the singleton manager."""

    def test_api_key_shortcut(self, clean_env, monkeypatch):
        monkeypatch.setenv("PLACEKEY_API_KEY", "from-env")

        assert load_settings().api.placekey.api_key == "from-env"

    def test_explicit_key_wins_over_shortcut(self, clean_env, monkeypatch):
        monkeypatch.setenv("PLACEKEY_API_KEY", "from-env")
        monkeypatch.setenv("PLACEKIT_API__PLACEKEY__API_KEY", "explicit")

        assert load_settings().api.placekey.api_key == "explicit"

    def test_dotenv_file_is_loaded(self, clean_env):
        (clean_env / ".env").write_text("PLACEKEY_API_KEY=dotenv-key\n", encoding="utf-8")

        try:
            assert load_settings().api.placekey.api_key == "dotenv-key"
        finally:
            os.environ.pop("PLACEKEY_API_KEY", None)

    def test_default_config_location(self, clean_env):
        (clean_env / "placekit.toml").write_text(
            "[cache]\nmax_size = 7\n", encoding="utf-8"
        )

        assert load_settings().cache.max_size == 7

    def test_invalid_config_raises_application_error(self, clean_env):
        path = clean_env / "bad.toml"
        path.write_text("[api.placekey]\ntimeout = -1\n", encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(path)

        assert exc_info.value.code == ErrorCode.CONFIG_ERROR

    def test_singleton_and_reload(self, clean_env, monkeypatch):
        loader = SettingsLoader()
        first = loader.get_config()

        assert loader.get_config() is first

        monkeypatch.setenv("PLACEKIT_CACHE__MAX_SIZE", "9")
        reloaded = loader.reload_config()

        assert reloaded is not first
        assert reloaded.cache.max_size == 9
        loader.reset()
