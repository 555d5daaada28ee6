"""Tests for environment-based settings and settings-driven policies."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from retrykit import policy_from_settings
from retrykit.config import PolicySettings, RetrykitSettings, clear_settings_cache, get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: object) -> object:
    """Isolate from any .env in the working directory and the cached instance."""
    monkeypatch.chdir(tmp_path)  # type: ignore[arg-type]
    for key in ("RETRYKIT_POLICY_DELAY_US", "RETRYKIT_POLICY_MAX_RETRIES", "RETRYKIT_POLICY_MAX_DELAY_US",
                "RETRYKIT_LOG_LEVEL", "RETRYKIT_LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


def test_defaults() -> None:
    settings = get_settings()
    assert settings.policy.delay_us == 50_000
    assert settings.policy.max_retries == 5
    assert settings.policy.max_delay_us is None
    assert not settings.policy.is_capped
    assert settings.logging.level == "INFO"
    assert settings.logging.format == "console"


def test_settings_cached_until_cleared(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("RETRYKIT_POLICY_MAX_RETRIES", "2")
    assert get_settings().policy.max_retries == 5
    clear_settings_cache()
    assert get_settings().policy.max_retries == 2


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RETRYKIT_POLICY_DELAY_US", "1000")
    monkeypatch.setenv("RETRYKIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("RETRYKIT_LOG_FORMAT", "json")
    settings = RetrykitSettings()
    assert settings.policy.delay_us == 1000
    assert settings.logging.level == "DEBUG"
    assert settings.logging.format == "json"


def test_negative_values_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RETRYKIT_POLICY_MAX_RETRIES", "-1")
    with pytest.raises(ValidationError):
        PolicySettings()


def test_policy_from_default_settings() -> None:
    policy = policy_from_settings()
    assert policy.preview(10) == [50_000] * 5


def test_policy_from_custom_settings() -> None:
    settings = RetrykitSettings(policy=PolicySettings(delay_us=300, max_retries=3, max_delay_us=100))
    policy = policy_from_settings(settings)
    assert settings.policy.is_capped
    assert policy.preview(10) == [100, 100, 100]
