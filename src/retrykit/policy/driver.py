"""Retry driver: run an action until it is accepted or the policy stops.

``is_acceptable(attempt, result)`` answers "should this result be retried?".
False returns the result immediately. True consults the policy: None hands
the result back as-is, a delay suspends the caller and runs the action again.

The driver never raises on its own and never catches. Exceptions from the
action, the predicate, the observer or the sleep function propagate and end
the session. Actions that fail recoverably should say so in their return
value, typically a Result:

    >>> from retrykit import catching, retrying, retry_on_err, exponential_backoff, limit_retries
    >>> retrying(exponential_backoff(10_000) + limit_retries(3), retry_on_err, lambda: catching(fetch))
"""

from __future__ import annotations

import asyncio
import inspect
import time
from functools import wraps
from typing import TYPE_CHECKING, Callable, ParamSpec, TypeVar

from retrykit.errors import Result, acatching, catching
from retrykit.observability import BoundLogger, get_logger

from .policy import DELAY_UNIT_SECONDS, Policy, require_policy
from .schedules import default_policy

if TYPE_CHECKING:
    from collections.abc import Awaitable

P = ParamSpec("P")
R = TypeVar("R")

Predicate = Callable[[int, R], bool]
RetryObserver = Callable[[int, int, R], None]


def _session_logger(policy: Policy) -> BoundLogger:
    # Rendered only when a line is actually emitted
    return get_logger("retrykit.driver").bind(policy=policy)


def retrying(
    policy: Policy,
    is_acceptable: Predicate[R],
    action: Callable[[], R],
    *,
    sleep: Callable[[float], object] = time.sleep,
    on_retry: RetryObserver[R] | None = None,
) -> R:
    """Run ``action`` under ``policy``, returning the last result produced.

    Args:
        policy: Decides whether and how long to wait before each retry
        is_acceptable: (attempt, result) -> True when the result should be retried
        action: Zero-arg operation to run; called at least once
        sleep: Suspension primitive taking seconds (default: time.sleep)
        on_retry: Observer called as (attempt, delay_us, result) before each wait

    Returns:
        The first result the predicate rejects, or the result in hand when
        the policy stops.
    """
    require_policy("policy", policy)
    log = _session_logger(policy)
    attempt = 0
    while True:
        result = action()
        if not is_acceptable(attempt, result):
            return result
        if (delay := policy.delay_for(attempt)) is None:
            log.info("retry policy exhausted", attempt=attempt)
            return result
        log.debug("retry scheduled", attempt=attempt, delay_us=delay)
        if on_retry is not None:
            on_retry(attempt, delay, result)
        sleep(delay * DELAY_UNIT_SECONDS)
        attempt += 1


async def aretrying(
    policy: Policy,
    is_acceptable: Callable[[int, R], bool | Awaitable[bool]],
    action: Callable[[], R | Awaitable[R]],
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    on_retry: RetryObserver[R] | None = None,
) -> R:
    """Async version of retrying().

    ``action`` and ``is_acceptable`` may be sync or async. The wait between
    attempts is the cancellation point: cancelling the task while it sleeps
    raises CancelledError out of this call without running the action again.
    """
    require_policy("policy", policy)
    log = _session_logger(policy)
    attempt = 0
    while True:
        result = action()
        if inspect.isawaitable(result):
            result = await result
        verdict = is_acceptable(attempt, result)  # type: ignore[arg-type]
        if inspect.isawaitable(verdict):
            verdict = await verdict
        if not verdict:
            return result  # type: ignore[return-value]
        if (delay := policy.delay_for(attempt)) is None:
            log.info("retry policy exhausted", attempt=attempt)
            return result  # type: ignore[return-value]
        log.debug("retry scheduled", attempt=attempt, delay_us=delay)
        if on_retry is not None:
            on_retry(attempt, delay, result)  # type: ignore[arg-type]
        await sleep(delay * DELAY_UNIT_SECONDS)
        attempt += 1


# ─────────────────────────────────────────────────────────────────────────────
# Predicates
# ─────────────────────────────────────────────────────────────────────────────


def retry_on_err(attempt: int, result: object) -> bool:
    """Retry while the action returns an Err."""
    return isinstance(result, Result) and result.is_err()


def retry_on_none(attempt: int, result: object) -> bool:
    """Retry while the action returns None."""
    return result is None


def retry_while(check: Callable[[R], bool]) -> Predicate[R]:
    """Lift a one-argument check on the result into a driver predicate."""
    return lambda _attempt, result: check(result)


# ─────────────────────────────────────────────────────────────────────────────
# Decorator
# ─────────────────────────────────────────────────────────────────────────────


def retry(
    policy: Policy | None = None,
    *,
    is_acceptable: Predicate[object] = retry_on_err,
    catch: tuple[type[BaseException], ...] = (),
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorate a sync or async function so each call runs under a retry policy.

    With ``catch``, the listed exceptions are turned into Err values and the
    decorated function returns a Result instead of raising them.

    Example:
        >>> @retry(exponential_backoff(100_000) + limit_retries(4), catch=(ConnectionError,))
        ... def fetch(url: str) -> bytes:
        ...     return urlopen(url).read()
        >>> fetch("https://example.com").unwrap_or(b"")
    """
    pol = default_policy() if policy is None else require_policy("policy", policy)

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                call = (lambda: acatching(lambda: func(*args, **kwargs), *catch)) if catch else (lambda: func(*args, **kwargs))
                return await aretrying(pol, is_acceptable, call)  # type: ignore[arg-type]
            return async_wrapper  # type: ignore[return-value]

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            call = (lambda: catching(lambda: func(*args, **kwargs), *catch)) if catch else (lambda: func(*args, **kwargs))
            return retrying(pol, is_acceptable, call)  # type: ignore[arg-type]
        return wrapper

    return decorator
