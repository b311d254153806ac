"""
Unit tests for engine and session helpers.
"""

import pytest
from sqlalchemy import inspect

from pokecatalog.core.database.utils import create_all, create_engine, create_sessionmaker, normalize_url

pytestmark = pytest.mark.asyncio


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("postgres://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgresql://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgresql+psycopg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgresql+asyncpg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("sqlite+aiosqlite:///./pokecatalog.db", "sqlite+aiosqlite:///./pokecatalog.db"),
        ],
    )
    async def test_normalize_url(self, url, expected):
        """Test Postgres URLs are rewritten to the asyncpg driver only."""
        assert normalize_url(url) == expected


class TestCreateAll:
    async def test_create_all_registers_both_tables(self, tmp_path):
        """Test create_all builds the users and pokemon tables."""
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
        try:
            await create_all(engine)
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            assert {"users", "pokemon"} <= set(tables)
        finally:
            await engine.dispose()

    async def test_sessionmaker_keeps_objects_loaded_after_commit(self, engine):
        """Test sessions do not expire attributes on commit."""
        maker = create_sessionmaker(engine)
        assert maker.kw["expire_on_commit"] is False
