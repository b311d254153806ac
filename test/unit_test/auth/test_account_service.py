"""
Unit tests for account registration, login and password hashing.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from pokecatalog.auth.security import hash_password, verify_password
from pokecatalog.auth.service import AccountService
from pokecatalog.catalog.errors import (
    CatalogValidationError,
    DataAccessError,
    DuplicateEmailError,
    InvalidCredentialsError,
)

pytestmark = pytest.mark.asyncio


@pytest.fixture
def accounts(user_repository) -> AccountService:
    # low cost factor keeps the suite fast
    return AccountService(user_repository, hash_rounds=4)


class TestPasswordHashing:
    async def test_hash_round_trip(self):
        """Test that a hash verifies its own password only."""
        hashed = hash_password("pikapika", rounds=4)
        assert hashed != "pikapika"
        assert verify_password("pikapika", hashed)
        assert not verify_password("wrong", hashed)

    async def test_malformed_hash_does_not_verify(self):
        """Test that a garbage stored hash is treated as a mismatch."""
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestRegister:
    """Test account registration."""

    async def test_register_stores_hash_and_defaults_name(self, accounts, user_repository):
        """Test that the password is hashed and the name defaults to the email."""
        user = await accounts.register("ash@example.com", "pikachu")

        assert user.id and len(user.id) == 32
        assert user.name == "ash@example.com"
        assert user.password_hash != "pikachu"
        assert verify_password("pikachu", user.password_hash)
        assert (await user_repository.get_by_email("ash@example.com")).id == user.id

    async def test_register_keeps_given_name(self, accounts):
        """Test that an explicit display name is kept."""
        user = await accounts.register("misty@example.com", "starmie", name="Misty")
        assert user.name == "Misty"

    async def test_email_is_normalized(self, accounts):
        """Test that emails are stored trimmed and lower-cased."""
        user = await accounts.register("  Brock@Example.COM ", "onix123")
        assert user.email == "brock@example.com"

    @pytest.mark.parametrize("email, password", [(None, "secret1"), ("", "secret1"), ("a@b.c", None), ("a@b.c", "")])
    async def test_missing_fields(self, accounts, email, password):
        """Test that email and password are both required."""
        with pytest.raises(CatalogValidationError) as exc_info:
            await accounts.register(email, password)
        assert exc_info.value.message == "email and password are required"

    async def test_short_password(self, accounts):
        """Test that passwords under six characters are rejected."""
        with pytest.raises(CatalogValidationError) as exc_info:
            await accounts.register("gary@example.com", "12345")
        assert exc_info.value.message == "password must be at least 6 characters long"

    async def test_duplicate_email(self, accounts):
        """Test that an email can only be registered once, regardless of case."""
        await accounts.register("oak@example.com", "professor")
        with pytest.raises(DuplicateEmailError):
            await accounts.register("OAK@example.com", "another1")

    async def test_lost_race_is_duplicate(self):
        """Test that a unique violation on insert is reported as duplicate email."""
        repository = MagicMock()
        repository.get_by_email = AsyncMock(return_value=None)
        repository.create = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("UNIQUE")))
        with pytest.raises(DuplicateEmailError):
            await AccountService(repository, hash_rounds=4).register("race@example.com", "secret1")

    async def test_store_failure(self):
        """Test that other store errors become DataAccessError."""
        repository = MagicMock()
        repository.get_by_email = AsyncMock(return_value=None)
        repository.create = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("disk full")))
        with pytest.raises(DataAccessError):
            await AccountService(repository, hash_rounds=4).register("full@example.com", "secret1")


class TestAuthenticate:
    """Test credential verification."""

    async def test_valid_credentials(self, accounts):
        """Test that matching credentials return the account."""
        registered = await accounts.register("ash@example.com", "pikachu")
        user = await accounts.authenticate("ASH@example.com", "pikachu")
        assert user.id == registered.id

    @pytest.mark.parametrize(
        "email, password",
        [("ash@example.com", "wrongpass"), ("nobody@example.com", "pikachu"), (None, None), ("ash@example.com", "")],
    )
    async def test_invalid_credentials(self, accounts, email, password):
        """Test that every failed login looks the same to the caller."""
        await accounts.register("ash@example.com", "pikachu")
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await accounts.authenticate(email, password)
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "invalid credentials"

    async def test_get_user(self, accounts):
        """Test lookup by id."""
        registered = await accounts.register("ash@example.com", "pikachu")
        assert (await accounts.get_user(registered.id)).email == "ash@example.com"
        assert await accounts.get_user("missing") is None
