"""
Database entity models.

Modules:
- users: Registered identities owning catalog records
- pokemon: Catalog records
"""

from .pokemon import Pokemon
from .users import User

__all__ = [
    "Pokemon",
    "User",
]
