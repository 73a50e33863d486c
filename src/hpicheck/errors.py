from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class HpiCheckError(Exception):
    """Base class for recoverable HPI check failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(HpiCheckError):
    """The upstream response reported failure or carried no result."""


class MalformedFieldError(HpiCheckError):
    """A required upstream field is missing or has the wrong shape."""

    def __init__(self, field_path: str, message: str) -> None:
        super().__init__(f"{field_path}: {message}")
        self.field_path = field_path
        self.reason = message


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: HpiCheckError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
