"""
Configuration Management for Homebook

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage keys live here too, so each repository gets its key injected
instead of hard-coding it.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HOMEBOOK_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="file",
        pattern="^(file|memory)$",
        description="Which key-value store to use"
    )
    path: str = Field(
        default=".homebook/local_storage.json",
        description="Path to the JSON file backing the store"
    )

    # One key per entity type; the key name is the schema version marker
    expenses_key: str = Field(
        default="expenses_v2",
        min_length=1,
        description="Storage key for the expense ledger"
    )
    tasks_key: str = Field(
        default="tasks_v3",
        min_length=1,
        description="Storage key for the to-do list"
    )

    quota_bytes: Optional[int] = Field(
        default=None,
        ge=1,
        description="Optional size limit for the whole store"
    )

    @field_validator('path')
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ so the file store never writes to a literal '~' folder."""
        return str(Path(v).expanduser())


class NotificationSettings(BaseSettings):
    """Transient feedback configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HOMEBOOK_NOTIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    dismiss_after_seconds: float = Field(
        default=3.0,
        gt=0.0,
        le=60.0,
        description="How long a toast stays on screen"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for local logs"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def notifications(self) -> NotificationSettings:
        return NotificationSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the failing ones.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "notifications", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
