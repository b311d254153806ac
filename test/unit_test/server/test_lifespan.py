"""
Unit tests for FastAPI application lifespan management.

Tests verify that startup initializes the database, creates the upload
directory and opens the shared PokeAPI client, and that shutdown closes it.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from pokecatalog.catalog.enrichment import PokeApiClient
from pokecatalog.server.main import lifespan

pytestmark = pytest.mark.asyncio


@pytest.fixture
def lifespan_settings(tmp_path):
    with patch("pokecatalog.server.main.settings") as mock:
        mock.uploads.dir = str(tmp_path / "uploads")
        mock.pokeapi.enabled = True
        mock.pokeapi.base_url = "http://mock/api/v2"
        mock.pokeapi.timeout = 1.0
        yield mock


class TestLifespanStartup:
    """Test application startup."""

    async def test_startup_initializes_db_dirs_and_client(self, lifespan_settings, tmp_path):
        """Test startup runs init_db, creates the upload dir and opens a client."""
        app = FastAPI()
        with patch("pokecatalog.server.main.init_db", new_callable=AsyncMock) as mock_init_db:
            async with lifespan(app):
                mock_init_db.assert_awaited_once()
                assert (tmp_path / "uploads").is_dir()
                assert isinstance(app.state.pokeapi_client, PokeApiClient)
                client = app.state.pokeapi_client
        assert client._client.is_closed

    async def test_enrichment_disabled_leaves_no_client(self, lifespan_settings):
        """Test that disabling PokeAPI leaves the client unset."""
        lifespan_settings.pokeapi.enabled = False
        app = FastAPI()
        with patch("pokecatalog.server.main.init_db", new_callable=AsyncMock):
            async with lifespan(app):
                assert app.state.pokeapi_client is None

    async def test_database_failure_does_not_abort_startup(self, lifespan_settings):
        """Test that a failing init_db is logged and startup continues."""
        app = FastAPI()
        with patch("pokecatalog.server.main.init_db", new_callable=AsyncMock, side_effect=RuntimeError("db down")), patch(
            "pokecatalog.server.main.logger"
        ) as mock_logger:
            async with lifespan(app):
                assert app.state.pokeapi_client is not None
        assert any("Database initialization failed" in str(c) for c in mock_logger.error.call_args_list)


class TestLifespanShutdown:
    async def test_shutdown_closes_client(self, lifespan_settings):
        """Test the shared client is closed on shutdown."""
        app = FastAPI()
        fake_client = MagicMock()
        fake_client.aclose = AsyncMock()
        with patch("pokecatalog.server.main.init_db", new_callable=AsyncMock), patch(
            "pokecatalog.server.main.PokeApiClient", return_value=fake_client
        ):
            async with lifespan(app):
                pass
        fake_client.aclose.assert_awaited_once()
