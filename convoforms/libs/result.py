"""
Result type shared by all use cases.

Use cases return ``Result`` instead of raising for expected business outcomes
(permission denied, quota exceeded, invalid state). The API layer inspects
``error.code`` and decides on the HTTP status.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Error:
    """Business error with a stable machine code and a human readable message"""

    code: str
    message: str
    reason: Optional[str] = None


class Result(Generic[T]):
    """Either a successful value or an Error"""

    __slots__ = ("_value", "_error")

    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self._value = value
        self._error = error

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ValueError(f"Result is an error: {self._error.code}")
        return self._value

    @property
    def error(self) -> Error:
        if self._error is None:
            raise ValueError("Result is ok, no error available")
        return self._error

    def __repr__(self) -> str:
        if self.is_err():
            return f"Result(error={self._error!r})"
        return f"Result(value={self._value!r})"


class Return:
    """Factory helpers for building Result instances"""

    @staticmethod
    def ok(value: Any = None) -> Result:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
