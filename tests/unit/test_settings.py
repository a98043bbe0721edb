"""Unit tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sample_app.config.settings import Settings, get_settings


class TestSettings:
    """Test Settings defaults and environment loading."""

    def test_defaults(self, monkeypatch):
        for var in ("APP_ENV", "LOG_TO_FILE", "STARTUP_DELAY_SECONDS"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.service_name == "sample-app"
        assert settings.port == 3000
        assert settings.app_env == "development"
        assert settings.log_level == "INFO"
        assert settings.log_dir == Path("logs")
        assert settings.log_to_file is True
        assert settings.startup_delay_seconds == 3.0
        assert settings.is_development is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", '["https://example.com"]')

        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.cors_allowed_origins == ["https://example.com"]

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="VERBOSE")

    def test_negative_startup_delay_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, startup_delay_seconds=-1)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestProductionValidation:
    """Production mode refuses insecure configuration."""

    def test_wildcard_cors_rejected(self):
        with pytest.raises(ValidationError, match="cors_allowed_origins"):
            Settings(_env_file=None, app_env="production")

    def test_debug_rejected(self):
        with pytest.raises(ValidationError, match="debug must be False"):
            Settings(
                _env_file=None,
                app_env="production",
                debug=True,
                cors_allowed_origins=["https://example.com"],
            )

    def test_secure_production_settings(self):
        settings = Settings(
            _env_file=None,
            app_env="production",
            cors_allowed_origins=["https://example.com"],
        )

        assert settings.is_production is True
