"""Typed service errors.

Services raise these; the API layer maps them to HTTP responses.
Messages are user-safe and never carry store internals.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


class ErrorCode(str, Enum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    DUPLICATE = "DUPLICATE"
    NOT_FOUND = "NOT_FOUND"
    REFERENCED = "REFERENCED"
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"


@dataclass(frozen=True)
class FieldError:
    """A message attached to one input field."""

    field: str
    message: str


class ServiceError(Exception):
    """Base error with code and user-safe message."""

    code: ErrorCode = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(ServiceError):
    """One or more field-scoped input problems."""

    code = ErrorCode.VALIDATION_FAILED

    def __init__(self, errors: Iterable[FieldError], message: str = "Validation failed") -> None:
        super().__init__(message)
        self.errors: List[FieldError] = list(errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field, message)])

    def fields(self) -> List[str]:
        return [e.field for e in self.errors]


class UniqueViolationError(ValidationError):
    """A write would break a uniqueness rule (duplicate booking, reused email)."""

    code = ErrorCode.DUPLICATE

    def __init__(self, field: str, message: str) -> None:
        super().__init__([FieldError(field, message)], message=message)


class NotFoundError(ServiceError):
    code = ErrorCode.NOT_FOUND

    def __init__(self, entity: str, entity_id: Optional[int] = None) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class ReferentialIntegrityError(ServiceError):
    """Raised when a delete is blocked by dependent records."""

    code = ErrorCode.REFERENCED

    def __init__(self, entity: str, entity_id: Optional[int] = None, detail: Optional[str] = None) -> None:
        super().__init__(detail or f"{entity} is still referenced by other records")
        self.entity = entity
        self.entity_id = entity_id


class ConcurrencyConflictError(ServiceError):
    """Raised when a write lost a race with another writer."""

    code = ErrorCode.CONCURRENCY_CONFLICT

    def __init__(self, entity: str, entity_id: Optional[int] = None) -> None:
        super().__init__(f"{entity} was modified by another request; reload and try again")
        self.entity = entity
        self.entity_id = entity_id
