"""
User repository.

Data access for registered accounts. Email lookups are case-sensitive on the
stored value; callers normalize emails before storing or querying.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ..entities.users import User
from .base import AsyncBaseRepository


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user accounts using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, User)

    async def create(self, user: User) -> User:
        """Insert an account.

        Raises:
            sqlalchemy.exc.IntegrityError: the email is already registered.
        """
        self.session.add(user)
        await self._commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: str | int) -> Optional[User]:
        return await self.session.get(User, str(user_id))

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
