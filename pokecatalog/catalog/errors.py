"""Error types raised by the catalog core.

Purpose:
- Provide one typed exception per failure class the catalog can report.
- Carry the HTTP-oriented status code next to the human-readable message so
  the server layer can translate errors without inspecting their type.

Usage:
- Catch ``CatalogError`` for any catalog failure and inspect ``status_code``.
- ``ServiceResult.unwrap()`` raises the matching subclass for a failed result.
"""

from __future__ import annotations

from typing import Any, Optional


class CatalogError(Exception):
    """Base error for catalog failures.

    Args:
        message: Human-readable error description.
        details: Optional structured context (e.g. field level messages).
    """

    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class CatalogValidationError(CatalogError):
    """Raised for input the caller can correct (bad shape or range)."""

    status_code = 400

    def __init__(self, message: str, *, field: Optional[str] = None, details: Optional[Any] = None) -> None:
        super().__init__(message, details=details)
        self.field = field


class RecordNotFoundError(CatalogError):
    """Raised when the requested record does not exist (HTTP 404)."""

    status_code = 404

    def __init__(self, message: str = "Pokemon not found", *, record_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.record_id = record_id


class UnauthorizedError(CatalogError):
    """Raised when a mutation is attempted without an identity (HTTP 401)."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized. Please log in.") -> None:
        super().__init__(message)


class InvalidCredentialsError(UnauthorizedError):
    """Raised when a login attempt does not match a stored account."""

    def __init__(self) -> None:
        super().__init__("invalid credentials")


class ForbiddenError(CatalogError):
    """Raised when an identity is present but may not mutate the record (HTTP 403)."""

    status_code = 403


class ConflictError(CatalogError):
    """Raised for uniqueness violations (HTTP 409)."""

    status_code = 409


class DuplicateNameError(ConflictError):
    """Raised when a record name is already taken."""

    def __init__(self, message: str = "A Pokemon with this name already exists.") -> None:
        super().__init__(message)


class DuplicateEmailError(ConflictError):
    """Raised when registering an email address that already has an account."""

    def __init__(self) -> None:
        super().__init__("user with this email already exists")


class DataAccessError(CatalogError):
    """Raised when the record store (or another backing service) is unavailable."""

    status_code = 500
