"""Policy constructors for common delay schedules.

All delays are microseconds. Every integer argument must be a non-negative
int; anything else raises InvalidArgument.

- limit_retries: retry immediately, up to N times
- constant_delay: fixed delay, unlimited retries
- exponential_backoff: base * 2^n, unlimited retries
- fibonacci_backoff: base * fib(n+1), unlimited retries
- limit_retries_by_delay: stop once the inner delay reaches a limit
- cap_delay: clamp the inner delay, never stops on its own
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from retrykit.errors import non_negative

from .policy import Policy, require_policy

if TYPE_CHECKING:
    from retrykit.config import RetrykitSettings


def limit_retries(max_attempts: int) -> Policy:
    """Retry immediately, but only up to ``max_attempts`` times."""
    limit = non_negative("max_attempts", max_attempts)
    return Policy(lambda n: 0 if n < limit else None, f"limit_retries({limit})")


def constant_delay(delay: int) -> Policy:
    """A constant delay with unlimited retries."""
    d = non_negative("delay", delay)
    return Policy(lambda _: d, f"constant_delay({d})")


def exponential_backoff(base: int) -> Policy:
    """Grow the delay exponentially: ``base * 2**n``.

    Computed with exact integer arithmetic, so the delay never wraps or loses
    precision. It also never stops growing; bound it with cap_delay or
    limit_retries_by_delay.
    """
    b = non_negative("base", base)
    return Policy(lambda n: b << n, f"exponential_backoff({b})")


def fibonacci_backoff(base: int) -> Policy:
    """Delay ``base * fib(n + 1)``: base, base, 2*base, 3*base, 5*base, ..."""
    b = non_negative("base", base)

    def delay(n: int) -> int:
        a, c = 0, b
        for _ in range(n + 1):
            a, c = c, a + c
        return a

    return Policy(delay, f"fibonacci_backoff({b})")


def limit_retries_by_delay(limit: int, inner: Policy) -> Policy:
    """Stop retrying once ``inner``'s delay reaches or exceeds ``limit``."""
    lim, p = non_negative("limit", limit), require_policy("inner", inner)

    def delay(n: int) -> int | None:
        d = p.fn(n)
        return None if d is None or d >= lim else d

    return Policy(delay, lambda: f"limit_retries_by_delay({lim}, {p!r})")


def cap_delay(limit: int, inner: Policy) -> Policy:
    """Clamp every delay of ``inner`` to at most ``limit``.

    Does not terminate retrying: ``cap_delay(m, exponential_backoff(b))``
    retries forever at ``m``. Pair it with limit_retries for termination.
    """
    lim, p = non_negative("limit", limit), require_policy("inner", inner)

    def delay(n: int) -> int | None:
        d = p.fn(n)
        return None if d is None else min(d, lim)

    return Policy(delay, lambda: f"cap_delay({lim}, {p!r})")


def default_policy() -> Policy:
    """50ms constant delay, at most 5 retries."""
    return constant_delay(50_000) + limit_retries(5)


DEFAULT_POLICY = default_policy()

# Never retries; handy as an explicit "off" switch
NO_RETRY = limit_retries(0)


def policy_from_settings(settings: RetrykitSettings | None = None) -> Policy:
    """Build the configured default policy from RETRYKIT_POLICY_* settings."""
    if settings is None:
        from retrykit.config import get_settings
        settings = get_settings()
    cfg = settings.policy
    policy = constant_delay(cfg.delay_us) + limit_retries(cfg.max_retries)
    return cap_delay(cfg.max_delay_us, policy) if cfg.max_delay_us is not None else policy
