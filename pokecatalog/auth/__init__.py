"""Account registration, login and password hashing."""

from .security import hash_password, verify_password
from .service import AccountService

__all__ = ["AccountService", "hash_password", "verify_password"]
