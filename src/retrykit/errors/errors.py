"""Standardized errors for policy construction and evaluation.

Policy functions are total over non-negative integers; anything else is
rejected up front with InvalidArgument rather than producing nonsense delays.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, Field, TypeAdapter, ValidationError


class ErrorCode(StrEnum):
    """Standard error codes."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNKNOWN = "UNKNOWN"


class PolicyError(BaseModel):
    """Structured description of a rejected policy argument."""

    model_config = {"frozen": True}

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    argument: str | None = None
    value: str | None = None

    @classmethod
    def create(
        cls,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        *,
        argument: str | None = None,
        value: object = None,
    ) -> Self:
        """Factory method for construction."""
        return cls(message=message, code=code, argument=argument, value=None if value is None else repr(value))

    def render(self) -> str:
        """Format as a single line: code, argument and offending value."""
        where = f" ({self.argument}={self.value})" if self.argument else ""
        return f"[{self.code}] {self.message}{where}"

    __str__ = render


class InvalidArgument(ValueError):
    """Raised when a policy parameter or attempt index is out of domain."""

    __slots__ = ("error",)

    def __init__(self, error: PolicyError) -> None:
        self.error = error
        super().__init__(error.render())

    @classmethod
    def create(cls, argument: str, value: object, message: str = "must be a non-negative integer") -> Self:
        return cls(PolicyError.create(message, ErrorCode.INVALID_ARGUMENT, argument=argument, value=value))


# Strict: rejects bool, float and numeric strings
NonNegativeInt = Annotated[int, Field(ge=0, strict=True)]
_NON_NEGATIVE: TypeAdapter[int] = TypeAdapter(NonNegativeInt)


def non_negative(argument: str, value: object) -> int:
    """Validate value as a non-negative int, raising InvalidArgument otherwise."""
    try:
        return _NON_NEGATIVE.validate_python(value)
    except ValidationError as e:
        raise InvalidArgument.create(argument, value, e.errors()[0]["msg"]) from e
