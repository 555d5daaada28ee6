"""Result/Either type for encoding action outcomes.

The retry driver never catches exceptions. Actions whose failures should be
retried report them through their return value instead, and Result is the
canonical shape for that:

    >>> retrying(exponential_backoff(1000) + limit_retries(3), retry_on_err, lambda: catching(fetch))

Performance notes:
- Uses __slots__ for minimal memory footprint
- Direct attribute access (no method calls) in hot paths
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterator

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")

_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Examples:
        >>> Ok(42).map(lambda x: x * 2).unwrap()
        84
        >>> Err("fail").map(lambda x: x * 2).unwrap_err()
        'fail'
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value = value
        self._is_ok = is_ok

    # ─── Type Checking ───────────────────────────────────────────────

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    # ─── Value Extraction ──────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value. Raises RuntimeError on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap() on Err: {self._value}")

    def unwrap_err(self) -> E:
        """Extract Err value. Raises RuntimeError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap_err() on Ok: {self._value}")

    def unwrap_or(self, default: T) -> T:
        return self._value if self._is_ok else default  # type: ignore[return-value]

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        return self._value if self._is_ok else f(self._value)  # type: ignore[return-value,arg-type]

    def ok(self) -> T | None:
        return self._value if self._is_ok else None  # type: ignore[return-value]

    def err(self) -> E | None:
        return self._value if not self._is_ok else None  # type: ignore[return-value]

    # ─── Functor / Monad ──────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to Ok value. Signature: Result[T,E] → (T→U) → Result[U,E]"""
        return Result(f(self._value), _OK) if self._is_ok else Result(self._value, _ERR)  # type: ignore[arg-type]

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to Err value. Signature: Result[T,E] → (E→F) → Result[T,F]"""
        return Result(f(self._value), _ERR) if not self._is_ok else Result(self._value, _OK)  # type: ignore[arg-type]

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind (>>=). Chain operations that can fail."""
        return f(self._value) if self._is_ok else Result(self._value, _ERR)  # type: ignore[arg-type]

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """On Err, apply f to recover. On Ok, pass through."""
        return f(self._value) if not self._is_ok else Result(self._value, _OK)  # type: ignore[arg-type]

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive pattern match. Forces handling both Ok and Err."""
        return ok(self._value) if self._is_ok else err(self._value)  # type: ignore[arg-type]

    # ─── Dunder Methods ──────────────────────────────────────────────────

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __hash__ = lambda self: hash((self._is_ok, self._value))  # noqa: E731
    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"  # noqa: E731
    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        return self._is_ok == other._is_ok and self._value == other._value if isinstance(other, Result) else NotImplemented

    def __iter__(self) -> Iterator[T]:
        """Iterate: yields value if Ok, nothing if Err."""
        if self._is_ok:
            yield self._value  # type: ignore[misc]


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, _ERR)


# ═══════════════════════════════════════════════════════════════════════════════
# Exception Capture
# ═══════════════════════════════════════════════════════════════════════════════


def catching(
    action: Callable[[], T],
    *exc_types: type[BaseException],
) -> Result[T, BaseException]:
    """Run action, returning Ok(value) or Err(exception) for the listed types.

    Defaults to catching Exception. Anything outside exc_types propagates.
    """
    caught = exc_types or (Exception,)
    try:
        return Result(action(), _OK)
    except caught as e:
        return Result(e, _ERR)


async def acatching(
    action: Callable[[], T] | Callable[[], Awaitable[T]],
    *exc_types: type[BaseException],
) -> Result[T, BaseException]:
    """Async version - awaits the action's result when it is awaitable."""
    caught = exc_types or (Exception,)
    try:
        value = action()
        if inspect.isawaitable(value):
            value = await value
        return Result(value, _OK)
    except caught as e:
        return Result(e, _ERR)
