"""
User entity model.

Users are the identities that own catalog records. Only the identifier is
consumed by the catalog core; email, display name and password hash belong to
the account flows.
"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now


def _new_user_id() -> str:
    return uuid4().hex


class User(Base, table=True):
    """Registered user account.

    Table: users
    """

    __tablename__ = "users"

    id: str = Field(default_factory=_new_user_id, primary_key=True, max_length=32)
    email: str = Field(unique=True, index=True, max_length=255, description="Login email address")
    name: str = Field(max_length=255, description="Display name")
    password_hash: str = Field(max_length=255, description="bcrypt password hash")
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email})"
