"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    PolicySettings,
    RetrykitSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "PolicySettings",
    "RetrykitSettings",
    "clear_settings_cache",
    "get_settings",
]
