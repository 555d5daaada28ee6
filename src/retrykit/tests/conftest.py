"""Shared fixtures: silent logging and a recording sleep."""

from __future__ import annotations

import pytest

from retrykit.observability import configure_logging


class SleepRecorder:
    """Stands in for time.sleep; records requested waits in seconds."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class AsyncSleepRecorder(SleepRecorder):
    async def __call__(self, seconds: float) -> None:  # type: ignore[override]
        self.calls.append(seconds)


@pytest.fixture(autouse=True)
def quiet_logging() -> object:
    """Keep driver logs off stderr unless a test configures its own renderer."""
    configure_logging("none")
    yield
    configure_logging("none")


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def async_sleep() -> AsyncSleepRecorder:
    return AsyncSleepRecorder()
