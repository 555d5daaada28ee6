"""Error handling for retrykit.

- ErrorCode/PolicyError/InvalidArgument: rejected policy arguments
- Result/Ok/Err: encoding action failures as values for the retry driver
"""

from .errors import ErrorCode, InvalidArgument, NonNegativeInt, PolicyError, non_negative
from .result import Err, Ok, Result, acatching, catching

__all__ = [
    "ErrorCode", "PolicyError", "InvalidArgument", "NonNegativeInt", "non_negative",
    "Result", "Ok", "Err", "catching", "acatching",
]
