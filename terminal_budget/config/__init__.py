"""Configuration package."""

from terminal_budget.config.settings import (
    AppSettings,
    RateSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "RateSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
