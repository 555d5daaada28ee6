"""Environment-based configuration using pydantic-settings.

Example:
    >>> from retrykit.config import get_settings
    >>> settings = get_settings()
    >>> settings.policy.delay_us
    50000
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # RETRYKIT_POLICY_DELAY_US=100000
    # RETRYKIT_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, NonNegativeInt, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYKIT_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class PolicySettings(BaseSettings):
    """Shape of the configured default policy. All delays in microseconds."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYKIT_POLICY_",
        extra="ignore",
    )

    delay_us: NonNegativeInt = Field(default=50_000, description="Constant delay between retries")
    max_retries: NonNegativeInt = Field(default=5, description="Retries allowed after the first attempt")
    max_delay_us: NonNegativeInt | None = Field(default=None, description="Optional cap applied to every delay")

    @computed_field
    @property
    def is_capped(self) -> bool:
        return self.max_delay_us is not None


class RetrykitSettings(BaseSettings):
    """Root settings, loaded from RETRYKIT_* variables and an optional .env file.

    Example environment variables:
        RETRYKIT_LOG_LEVEL=DEBUG
        RETRYKIT_LOG_FORMAT=json
        RETRYKIT_POLICY_MAX_RETRIES=10
    """

    model_config = SettingsConfigDict(
        env_prefix="RETRYKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    policy: PolicySettings = Field(default_factory=PolicySettings)


@lru_cache(maxsize=1)
def get_settings() -> RetrykitSettings:
    """Get the global settings instance (cached)."""
    return RetrykitSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() rereads the environment."""
    get_settings.cache_clear()
