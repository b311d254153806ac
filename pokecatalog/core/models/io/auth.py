"""
Account I/O models for registration and login.

Presence and length checks live in ``AccountService`` so clients receive the
same messages whichever surface calls it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class RegisterRequest(CamelModel):
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=255)


class LoginRequest(CamelModel):
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = None


class UserRead(CamelModel):
    """Public view of an account (never includes the password hash)."""

    id: str
    email: str
    name: str
    created_at: Optional[datetime] = None


class RegisterResponse(CamelModel):
    message: str
    user: UserRead
