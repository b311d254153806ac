"""
Database layer for PokeCatalog.

This package provides a unified location for all database entities and repositories.

Structure:
- entities/: Database entity models (one module per table)
- repositories/: Data access layer (one module per table)
- session.py: Global engine and session factory used by the HTTP layer
- utils.py: Database utility functions (engine, session factory, table creation)
"""

from .base import Base, utc_now
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "utc_now",
]
