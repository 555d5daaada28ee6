"""Retry policies and the driver that runs them.

Example:
    >>> from retrykit.policy import exponential_backoff, cap_delay, limit_retries, retrying
    >>> policy = cap_delay(2_000_000, exponential_backoff(100_000)) + limit_retries(6)
    >>> retrying(policy, lambda attempt, status: status >= 500, call_service)
"""

from .driver import aretrying, retry, retry_on_err, retry_on_none, retry_while, retrying
from .policy import DELAY_UNIT_SECONDS, Policy
from .schedules import (
    DEFAULT_POLICY,
    NO_RETRY,
    cap_delay,
    constant_delay,
    default_policy,
    exponential_backoff,
    fibonacci_backoff,
    limit_retries,
    limit_retries_by_delay,
    policy_from_settings,
)

__all__ = [
    # Policy value
    "Policy",
    "DELAY_UNIT_SECONDS",
    # Constructors
    "limit_retries",
    "constant_delay",
    "exponential_backoff",
    "fibonacci_backoff",
    "limit_retries_by_delay",
    "cap_delay",
    "default_policy",
    "policy_from_settings",
    "DEFAULT_POLICY",
    "NO_RETRY",
    # Driver
    "retrying",
    "aretrying",
    "retry",
    "retry_on_err",
    "retry_on_none",
    "retry_while",
]
