"""Tagged result type returned by catalog service operations.

Every read-by-id and mutation operation of ``CatalogService`` returns a
``ServiceResult`` whose ``outcome`` says which branch happened. Callers either
branch on ``outcome`` or call ``unwrap()`` to get the value or the matching
``CatalogError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from .errors import (
    CatalogError,
    ConflictError,
    DataAccessError,
    ForbiddenError,
    RecordNotFoundError,
)

T = TypeVar("T")


class Outcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    DATA_ACCESS_FAILURE = "data_access_failure"


_ERROR_TYPES: dict[Outcome, type[CatalogError]] = {
    Outcome.NOT_FOUND: RecordNotFoundError,
    Outcome.FORBIDDEN: ForbiddenError,
    Outcome.CONFLICT: ConflictError,
    Outcome.DATA_ACCESS_FAILURE: DataAccessError,
}


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a catalog operation plus its value or failure message."""

    outcome: Outcome
    value: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "ServiceResult[T]":
        return cls(Outcome.OK, value=value)

    @classmethod
    def not_found(cls, message: str = "Pokemon not found") -> "ServiceResult[T]":
        return cls(Outcome.NOT_FOUND, message=message)

    @classmethod
    def forbidden(cls, message: str) -> "ServiceResult[T]":
        return cls(Outcome.FORBIDDEN, message=message)

    @classmethod
    def conflict(cls, message: str = "A Pokemon with this name already exists.") -> "ServiceResult[T]":
        return cls(Outcome.CONFLICT, message=message)

    @classmethod
    def data_access_failure(cls, message: str) -> "ServiceResult[T]":
        return cls(Outcome.DATA_ACCESS_FAILURE, message=message)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    def unwrap(self) -> Optional[T]:
        """Return the value of a successful result or raise the matching error.

        Raises:
            CatalogError: subclass matching ``outcome`` when the result failed.
        """
        if self.ok:
            return self.value
        raise _ERROR_TYPES[self.outcome](self.message or self.outcome.value)
