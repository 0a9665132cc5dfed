"""
fetchstate.results

Tagged outcome types.

Responsibilities:
- Describe a finished execution as `Ok(value)` or `Failed(error)`.
- Carry error details (`ErrorInfo`) without requiring an exception object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    # `message` is exactly the exception text or the reported error message.
    message: str
    exception: BaseException | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> ErrorInfo:
        return cls(message=str(exc), exception=exc)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failed:
    error: ErrorInfo

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def with_message(cls, message: str) -> Failed:
        return cls(error=ErrorInfo(message=message))


Outcome: TypeAlias = Ok[Any] | Failed


# --- Module Notes -----------------------------------------------------------
# User functions may return either tag directly; a plain return value is treated as Ok.
