"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./storeadmin.db",
        description="Database connection URL used by SQLAlchemy for the record store",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone used when stamping notification timestamps",
    )
    cron_secret: str | None = Field(
        default=None,
        description="Bearer secret expected by the scheduled notification endpoint",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the admin API from a browser",
    )
    settings_cache_ttl_seconds: float = Field(
        default=300,
        description="Freshness window for cached site and store settings",
        gt=0,
    )
    notification_read_retention_days: int = Field(
        default=30,
        description="Days a read notification is kept before the sweeper deletes it",
        gt=0,
    )
    notification_cleanup_batch_size: int = Field(
        default=200,
        description="Number of records loaded per batch by the expiry sweeper",
        gt=0,
    )

    @field_validator("cron_secret")
    @classmethod
    def _blank_secret_is_unset(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
