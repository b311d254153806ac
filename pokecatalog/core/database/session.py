"""
Global database session and engine management.

This module manages the AsyncEngine and async_sessionmaker instances used by
the HTTP layer. Domain services never import this module; they receive a
repository bound to a session through dependency injection.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from pokecatalog.core.logging_config import get_logger
from pokecatalog.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)

# Create global engine and session factory
engine = create_engine(settings.database.url, echo=settings.database.echo)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the database.

    Creates missing tables when ``DATABASE__AUTO_CREATE`` is enabled, which is
    the default for local SQLite development. Deployments running the Alembic
    migrations should disable it.
    """
    if not settings.database.auto_create:
        logger.info("Automatic table creation disabled; relying on Alembic migrations")
        return
    await create_all(engine)
    logger.info("Database tables ensured")
