from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    UNEXPECTED = "unexpected"


@dataclass
class ServiceError:
    kind: ErrorKind
    message: str
    detail: Optional[str] = None


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a service operation: either a value or an error."""
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, detail: Optional[str] = None) -> "ServiceResult[T]":
        return cls(error=ServiceError(kind=kind, message=message, detail=detail))
