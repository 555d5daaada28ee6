"""The Policy value: attempt index -> optional delay.

A Policy wraps a pure function. ``None`` means stop retrying; an int means
wait that many microseconds, then retry. Attempt indices are 0-based and
count retries already performed, so ``delay_for(0)`` is consulted after the
first unaccepted result.

Composition retries only while both sides want to, waiting the longer of
the two delays:

    >>> p = constant_delay(50_000) + limit_retries(5)
    >>> p.preview(7)
    [50000, 50000, 50000, 50000, 50000]
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, TypeAlias, Union

from retrykit.errors import InvalidArgument, non_negative

# Delays are expressed in microseconds everywhere
DELAY_UNIT_SECONDS = 1e-6

DelayFn: TypeAlias = Callable[[int], "int | None"]
PolicyLike: TypeAlias = Union["Policy", Callable[[], "Policy"]]


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Policy:
    """Immutable retry policy.

    Attributes:
        fn: Pure function from attempt index to delay (µs) or None to stop
        name: Label used in repr and logs; may be a zero-arg callable producing it
    """

    fn: DelayFn
    name: str | Callable[[], str] | _Sum | None = None

    def delay_for(self, attempt: int) -> int | None:
        """Delay in microseconds before retry number ``attempt + 1``, or None to stop."""
        if isinstance(attempt, bool) or not isinstance(attempt, int) or attempt < 0:
            raise InvalidArgument.create("attempt", attempt)
        return self.fn(attempt)

    def append(self, other: PolicyLike) -> Policy:
        """Combine with another policy: stop when either stops, else wait the max.

        ``other`` may be a zero-arg callable returning a Policy. It is resolved
        once, on first use, and never when this policy alone already says stop.
        """
        left, right = self, _Deferred(other)

        def combined(n: int) -> int | None:
            if (a := left.fn(n)) is None or (b := right.get().fn(n)) is None:
                return None
            return max(a, b)

        return Policy(combined, _Sum(left, right))

    def __add__(self, other: object) -> Policy:
        if isinstance(other, Policy) or callable(other):
            return self.append(other)  # type: ignore[arg-type]
        return NotImplemented

    def preview(self, limit: int) -> list[int]:
        """Delays for attempts ``0..limit-1``, stopping at the first None."""
        out: list[int] = []
        for n in range(non_negative("limit", limit)):
            if (d := self.fn(n)) is None:
                break
            out.append(d)
        return out

    def __repr__(self) -> str:
        # Flattened with an explicit stack; compositions may nest arbitrarily deep
        parts: list[str] = []
        stack: list[Policy | _Deferred] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, _Deferred):
                if item.resolved is None:
                    parts.append("<deferred>")
                    continue
                item = item.resolved
            match item.name:
                case _Sum(left=left, right=right):
                    stack += (right, left)
                case None:
                    parts.append(f"Policy({item.fn!r})")
                case str(name):
                    parts.append(name)
                case name:
                    parts.append(name())
        return " + ".join(parts)


class _Sum:
    """Name of an append() result: its two operands."""

    __slots__ = ("left", "right")
    __match_args__ = ("left", "right")

    def __init__(self, left: Policy, right: _Deferred) -> None:
        self.left, self.right = left, right


class _Deferred:
    """Right operand of append(), resolved at most once even across threads."""

    __slots__ = ("_source", "_policy", "_lock")

    def __init__(self, source: PolicyLike) -> None:
        self._source = source
        self._policy = source if isinstance(source, Policy) else None
        self._lock = None if self._policy is not None else threading.Lock()
        if self._policy is None and not callable(source):
            raise TypeError(f"expected Policy or callable returning Policy, got {type(source).__name__}")

    @property
    def resolved(self) -> Policy | None:
        return self._policy

    def get(self) -> Policy:
        if (policy := self._policy) is not None:
            return policy
        with self._lock:  # type: ignore[union-attr]
            if self._policy is None:
                policy = self._source()  # type: ignore[operator]
                if not isinstance(policy, Policy):
                    raise TypeError(f"deferred policy resolved to {type(policy).__name__}, expected Policy")
                self._policy = policy
        return self._policy

    def __repr__(self) -> str:
        return "<deferred>" if self._policy is None else repr(self._policy)


def require_policy(argument: str, value: object) -> Policy:
    """Return value if it is a Policy, else raise TypeError naming the argument."""
    if not isinstance(value, Policy):
        raise TypeError(f"{argument} must be a Policy, got {type(value).__name__}")
    return value
