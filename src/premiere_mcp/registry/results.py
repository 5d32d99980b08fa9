"""
Dispatch results — exactly one of Success or Failure per call
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class FailureKind(str, Enum):
    NOT_FOUND = "NotFound"
    VALIDATION_ERROR = "ValidationError"
    EXECUTION_ERROR = "ExecutionError"


@dataclass(frozen=True)
class Success:
    payload: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    cause: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return False

    def describe(self) -> str:
        """Render as '<kind>: <message>' for wire error text."""
        return f"{self.kind.value}: {self.message}"


DispatchResult = Union[Success, Failure]


def not_found(message: str) -> Failure:
    return Failure(FailureKind.NOT_FOUND, message)


def invalid(message: str, cause: Optional[BaseException] = None) -> Failure:
    return Failure(FailureKind.VALIDATION_ERROR, message, cause)


def execution_failed(cause: BaseException) -> Failure:
    return Failure(FailureKind.EXECUTION_ERROR, str(cause) or type(cause).__name__, cause)
