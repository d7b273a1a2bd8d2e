"""Injector configuration using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation.
"""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class N8NConfig(BaseSettings):
    """n8n instance settings shared with the service being bootstrapped."""

    model_config = SettingsConfigDict(
        env_prefix="N8N_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None, description="Pre-shared API key (JWT) to inject"
    )
    user_folder: Path | None = Field(
        default=None, description="n8n user folder holding database.sqlite"
    )


class InjectorConfig(BaseSettings):
    """Polling and placeholder record settings for the injector."""

    model_config = SettingsConfigDict(
        env_prefix="INJECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path | None = Field(
        default=None,
        description="Explicit database file path, overrides the user folder",
    )
    max_attempts: int = Field(
        default=30, ge=0, description="Polling attempts before giving up"
    )
    poll_interval: float = Field(
        default=1.0, ge=0, description="Seconds between database file checks"
    )
    settle_delay: float = Field(
        default=2.0,
        ge=0,
        description="Seconds to wait after the file appears for schema setup",
    )

    # Placeholder user record
    default_user_id: str = Field(
        default="8c623e46-4154-4262-9507-d911fa2f67a1",
        description="User ID used when the API key carries no subject claim",
    )
    user_email: str = Field(default="user@n8n.local")
    user_first_name: str = Field(default="N8N")
    user_last_name: str = Field(default="User")
    user_password: str = Field(
        default="$2a$10$placeholder.api.only",
        description="Placeholder password hash; the user is API-only",
    )
    user_global_role_id: int = Field(default=1)

    api_key_label: str = Field(
        default="Production API Key (Injected)",
        description="Label stored with the injected API key",
    )


class AppConfig(BaseSettings):
    """General application configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )


class Settings(BaseSettings):
    """Main settings combining all configuration sections."""

    # Load from .env
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    n8n: N8NConfig = Field(default_factory=N8NConfig)
    injector: InjectorConfig = Field(default_factory=InjectorConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    def configure_logging(self) -> None:
        """Configure logging based on settings."""
        numeric_level = getattr(logging, self.app.log_level.upper(), None)
        if not isinstance(numeric_level, int):
            numeric_level = logging.INFO

        logging.basicConfig(
            level=numeric_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # Quiet noisy third-party loggers
        for noisy_logger in ("sqlalchemy.engine", "sqlalchemy.pool"):
            logging.getLogger(noisy_logger).setLevel(logging.WARNING)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance.

    Returns:
        Settings instance with loaded configuration.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
