"""Tests for the Result type and exception capture.

Validates:
- Functor and monad laws
- Accessors on both variants
- catching/acatching boundaries
"""

from __future__ import annotations

from typing import Callable

import pytest

from retrykit import Err, Ok, Result, acatching, catching


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor & Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """Functor law: fmap id = id"""
    assert Ok(42).map(lambda x: x) == Ok(42)
    assert Err("fail").map(lambda x: x) == Err("fail")


def test_functor_composition() -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2
    result: Result[int, str] = Ok(5)
    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


def test_monad_left_identity() -> None:
    """Monad law: return a >>= f = f a"""
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert Ok(42).flat_map(f) == f(42)


def test_monad_right_identity() -> None:
    """Monad law: m >>= return = m"""
    m: Result[int, str] = Ok(42)
    assert m.flat_map(lambda x: Ok(x)) == m


# ═════════════════════════════════════════════════════════════════════════════
# Operational Tests
# ═════════════════════════════════════════════════════════════════════════════


def test_ok_accessors() -> None:
    result: Result[int, str] = Ok(42)
    assert result.is_ok() and not result.is_err()
    assert result.unwrap() == 42
    assert result.ok() == 42
    assert result.err() is None
    assert bool(result)
    assert list(result) == [42]


def test_err_accessors() -> None:
    result: Result[int, str] = Err("failed")
    assert result.is_err() and not result.is_ok()
    assert result.unwrap_err() == "failed"
    assert result.unwrap_or(0) == 0
    assert result.unwrap_or_else(len) == 6
    assert not bool(result)
    with pytest.raises(RuntimeError, match="unwrap"):
        result.unwrap()


def test_map_err_and_or_else() -> None:
    assert Err("x").map_err(str.upper) == Err("X")
    assert Err("x").or_else(lambda e: Ok(len(e))) == Ok(1)
    assert Ok(1).or_else(lambda e: Ok(99)) == Ok(1)


def test_match() -> None:
    assert Ok(2).match(ok=lambda v: v + 1, err=lambda e: -1) == 3
    assert Err("e").match(ok=lambda v: v + 1, err=lambda e: -1) == -1


def test_repr_and_hash() -> None:
    assert repr(Ok(1)) == "Ok(1)"
    assert repr(Err("e")) == "Err('e')"
    assert hash(Ok(1)) == hash(Ok(1))
    assert Ok(1) != Err(1)


# ═════════════════════════════════════════════════════════════════════════════
# Exception Capture
# ═════════════════════════════════════════════════════════════════════════════


def test_catching_ok() -> None:
    assert catching(lambda: 5) == Ok(5)


def test_catching_default_catches_exception() -> None:
    result = catching(lambda: 1 // 0)
    assert isinstance(result.unwrap_err(), ZeroDivisionError)


def test_catching_only_listed_types() -> None:
    def boom() -> int:
        raise KeyError("k")

    assert catching(boom, KeyError, ValueError).is_err()
    with pytest.raises(KeyError):
        catching(boom, ConnectionError)


@pytest.mark.asyncio
async def test_acatching_async_and_sync() -> None:
    async def ok() -> int:
        return 3

    async def fail() -> int:
        raise TimeoutError

    assert await acatching(ok) == Ok(3)
    assert await acatching(lambda: 4) == Ok(4)
    assert isinstance((await acatching(fail, TimeoutError)).unwrap_err(), TimeoutError)
