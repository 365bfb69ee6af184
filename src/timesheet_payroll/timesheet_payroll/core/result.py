from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .enums import ResultStatus

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a payroll operation.

    Keeps "nothing to report" and "something failed" apart while still
    carrying a usable value (usually an empty list) in both cases.
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def empty(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(status=ResultStatus.EMPTY, value=value)

    @classmethod
    def fault(cls, error: str, value: Optional[T] = None) -> "Result[T]":
        return cls(status=ResultStatus.FAULT, value=value, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status == ResultStatus.OK

    @property
    def is_empty(self) -> bool:
        return self.status == ResultStatus.EMPTY

    @property
    def is_fault(self) -> bool:
        return self.status == ResultStatus.FAULT
