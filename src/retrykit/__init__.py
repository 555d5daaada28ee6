"""retrykit - Composable retry policies for fallible operations.

A Policy maps "retries already performed" to "how long to wait next, or
stop". Build one from schedule constructors, combine with ``+``, and hand
it to the driver together with the action to run.

Quick Start:
    >>> from retrykit import constant_delay, limit_retries, retrying
    >>>
    >>> policy = constant_delay(50_000) + limit_retries(5)   # 50ms, at most 5 retries
    >>> policy.preview(10)
    [50000, 50000, 50000, 50000, 50000]
    >>>
    >>> retrying(policy, lambda attempt, status: status == 503, ping)

Failures as values:
    >>> from retrykit import catching, retry_on_err
    >>> retrying(policy, retry_on_err, lambda: catching(fetch, ConnectionError))

Decorator:
    >>> from retrykit import retry, exponential_backoff
    >>> @retry(exponential_backoff(10_000) + limit_retries(3), catch=(TimeoutError,))
    ... async def fetch(url: str) -> bytes: ...

All delays are microseconds.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .errors import Err, ErrorCode, InvalidArgument, Ok, PolicyError, Result, acatching, catching
from .policy import (
    DEFAULT_POLICY,
    DELAY_UNIT_SECONDS,
    NO_RETRY,
    Policy,
    aretrying,
    cap_delay,
    constant_delay,
    default_policy,
    exponential_backoff,
    fibonacci_backoff,
    limit_retries,
    limit_retries_by_delay,
    policy_from_settings,
    retry,
    retry_on_err,
    retry_on_none,
    retry_while,
    retrying,
)

__all__ = [
    "__version__",
    # Policy algebra
    "Policy", "DELAY_UNIT_SECONDS", "DEFAULT_POLICY", "NO_RETRY",
    "limit_retries", "constant_delay", "exponential_backoff", "fibonacci_backoff",
    "limit_retries_by_delay", "cap_delay", "default_policy", "policy_from_settings",
    # Driver
    "retrying", "aretrying", "retry", "retry_on_err", "retry_on_none", "retry_while",
    # Errors
    "ErrorCode", "PolicyError", "InvalidArgument", "Result", "Ok", "Err", "catching", "acatching",
]
