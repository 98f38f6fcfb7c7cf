"""
Unit tests for Config.
Tests defaults, settings file loading, environment overrides and
credential handling.
"""

import json

import pytest

from commlog.core.config import Config, DEFAULT_TOKEN_URI


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "config"


def _write_settings(config_dir, data):
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "settings.json").write_text(json.dumps(data), encoding="utf-8")


class TestDefaults:

    def test_defaults_without_file(self, config_dir):
        config = Config(config_dir, environ={})

        assert config.display_timezone == "Europe/Prague"
        assert config.default_calendar_id == "primary"
        assert config.get("max_results") == 1000
        assert config.get("search_window_days") == 30
        assert config.get("port") == 3001
        assert config.cors_origins == ["*"]
        assert config.debug is False

    def test_missing_directory_not_created(self, config_dir):
        Config(config_dir, environ={})
        assert not config_dir.exists()

    def test_get_default_for_unknown_key(self, config_dir):
        assert Config(config_dir, environ={}).get("nope", "fallback") == "fallback"


class TestSettingsFile:

    def test_file_overrides_defaults(self, config_dir):
        _write_settings(config_dir, {"display_timezone": "UTC", "max_results": 200})
        config = Config(config_dir, environ={})

        assert config.display_timezone == "UTC"
        assert config.get("max_results") == 200
        assert config.default_calendar_id == "primary"

    def test_missing_file_is_left_alone(self, config_dir):
        config = Config(config_dir, environ={})

        assert config.get("search_window_days") == 30
        assert not (config_dir / "settings.json").exists()


class TestEnvironmentOverrides:

    def test_env_beats_file(self, config_dir):
        _write_settings(config_dir, {"display_timezone": "UTC"})
        config = Config(config_dir, environ={"COMMLOG_TIMEZONE": "America/New_York"})
        assert config.display_timezone == "America/New_York"

    def test_typed_values(self, config_dir):
        config = Config(config_dir, environ={
            "PORT": "8080",
            "COMMLOG_DEBUG": "true",
            "COMMLOG_CORS_ORIGINS": "https://a.example, https://b.example",
        })
        assert config.get("port") == 8080
        assert config.debug is True
        assert config.cors_origins == ["https://a.example", "https://b.example"]

    def test_empty_env_value_ignored(self, config_dir):
        config = Config(config_dir, environ={"LOG_LEVEL": ""})
        assert config.get("log_level") == "INFO"

    def test_config_dir_from_env(self, tmp_path):
        other = tmp_path / "elsewhere"
        _write_settings(other, {"default_calendar_id": "team@example.com"})
        config = Config(environ={"COMMLOG_CONFIG_DIR": str(other)})
        assert config.default_calendar_id == "team@example.com"


class TestGoogleCredentials:

    def test_credentials_from_env(self, config_dir):
        config = Config(config_dir, environ={
            "GOOGLE_CLIENT_ID": "cid",
            "GOOGLE_CLIENT_SECRET": "secret",
            "GOOGLE_REFRESH_TOKEN": "refresh",
        })
        creds = config.google_credentials()

        assert creds["client_id"] == "cid"
        assert creds["client_secret"] == "secret"
        assert creds["refresh_token"] == "refresh"
        assert creds["access_token"] is None
        assert creds["token_uri"] == DEFAULT_TOKEN_URI
        assert config.has_google_credentials()

    def test_no_credentials(self, config_dir):
        assert not Config(config_dir, environ={}).has_google_credentials()
