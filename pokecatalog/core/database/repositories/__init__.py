"""
Database repository layer using SQLModel.

All repositories share the ``AsyncBaseRepository`` CRUD interface and the
``QueryBuilder`` helpers for filtering and pagination.

Modules:
- base: AsyncBaseRepository interface and QueryBuilder utilities
- pokemon: Catalog record repository
- users: User account repository
"""

from .pokemon import PokemonRepository
from .users import UserRepository

__all__ = [
    "PokemonRepository",
    "UserRepository",
]
