"""
Application Settings.

Centralized configuration using Pydantic Settings with environment variable loading.
All settings are validated at startup - invalid values will raise an error.

Production Mode:
    When app_env="production", additional validations apply:
    - debug must be False
    - cors_allowed_origins cannot be ["*"]
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Service Identity
    # -------------------------------------------------------------------------
    service_name: str = Field(
        default="sample-app",
        description="Service name attached to every log record",
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version reported by the API",
    )
    app_env: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, ge=1, le=65535, description="Listen port")

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Console output format. Files are always JSON lines.",
    )
    log_to_file: bool = Field(
        default=True,
        description="Write app.log and error.log under log_dir",
    )
    log_dir: Path = Field(
        default=Path("logs"),
        description="Directory for log files",
    )

    # -------------------------------------------------------------------------
    # CORS Settings
    # -------------------------------------------------------------------------
    cors_allowed_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins. Use ['*'] for development only.",
    )

    # -------------------------------------------------------------------------
    # Runtime Behavior
    # -------------------------------------------------------------------------
    startup_delay_seconds: float = Field(
        default=3.0,
        ge=0,
        description="Seconds after startup before the readiness probe reports ready",
    )
    seed_users: bool = Field(
        default=True,
        description="Start the user store with the demo users",
    )

    # -------------------------------------------------------------------------
    # Cloud Metadata (reported by the greeting endpoint)
    # -------------------------------------------------------------------------
    cloud_provider: str = Field(default="local", description="Cloud the service runs on")
    region: str = Field(default="local", description="Deployment region")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production settings are secure."""
        if self.app_env == "production":
            errors = []

            if self.debug:
                errors.append("debug must be False in production")

            if "*" in self.cors_allowed_origins:
                errors.append("cors_allowed_origins cannot contain '*' in production")

            if errors:
                raise ValueError(
                    f"Production configuration errors: {'; '.join(errors)}"
                )

        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
