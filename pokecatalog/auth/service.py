"""
Account service: registration and credential login.

Validation failures raise ``CatalogValidationError`` (400), a taken email
raises ``DuplicateEmailError`` (409) and a failed login raises
``InvalidCredentialsError`` (401) without revealing which part was wrong.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pokecatalog.catalog.errors import (
    CatalogValidationError,
    DataAccessError,
    DuplicateEmailError,
    InvalidCredentialsError,
)
from pokecatalog.core.database.entities.users import User
from pokecatalog.core.database.repositories.users import UserRepository
from pokecatalog.core.logging_config import get_logger

from .security import hash_password, verify_password

logger = get_logger(__name__)

DEFAULT_MIN_PASSWORD_LENGTH = 6


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class AccountService:
    """Registers accounts and verifies credentials."""

    def __init__(
        self,
        repository: UserRepository,
        *,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
        hash_rounds: int = 10,
    ) -> None:
        self._repository = repository
        self._min_password_length = min_password_length
        self._hash_rounds = hash_rounds

    async def register(self, email: Optional[str], password: Optional[str], name: Optional[str] = None) -> User:
        """Create an account.

        Args:
            email: Login email, stored lower-cased
            password: Plain text password, stored as a bcrypt hash
            name: Display name; defaults to the email

        Returns:
            The persisted user

        Raises:
            CatalogValidationError: missing email/password or password too short
            DuplicateEmailError: the email already has an account
            DataAccessError: the store could not be written
        """
        email = normalize_email(email)
        if not email or not password:
            raise CatalogValidationError("email and password are required")
        if len(password) < self._min_password_length:
            raise CatalogValidationError(
                f"password must be at least {self._min_password_length} characters long", field="password"
            )

        if await self._repository.get_by_email(email) is not None:
            raise DuplicateEmailError()

        user = User(
            email=email,
            name=(name or "").strip() or email,
            password_hash=hash_password(password, rounds=self._hash_rounds),
        )
        try:
            user = await self._repository.create(user)
        except IntegrityError as e:
            # lost a race with a concurrent registration
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            logger.error(f"Error registering user: {e}")
            raise DataAccessError("an unexpected error occurred during registration") from e

        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: Optional[str], password: Optional[str]) -> User:
        """Return the account matching the credentials.

        Raises:
            InvalidCredentialsError: unknown email or wrong password
        """
        email = normalize_email(email)
        if not email or not password:
            raise InvalidCredentialsError()
        user = await self._repository.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()
        return user

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self._repository.get_by_id(user_id)
