"""Configuration package."""

from homebook.config.settings import (
    AppSettings,
    NotificationSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "NotificationSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
