"""
Unit tests for the health and version endpoints.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

pytestmark = pytest.mark.asyncio


class TestHealth:
    async def test_health_ok(self, client):
        """Test that a reachable database reports ok."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}

    async def test_health_degraded(self, client, session, monkeypatch):
        """Test that an unreachable database reports 503."""
        monkeypatch.setattr(session, "execute", AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("down"))))
        response = await client.get("/health")
        assert response.status_code == 503
        assert response.json() == {"status": "degraded", "database": "unavailable"}

    async def test_timing_header(self, client):
        """Test that responses carry the processing time."""
        response = await client.get("/health")
        assert float(response.headers["X-Process-Time"]) >= 0


class TestVersion:
    async def test_version(self, client):
        """Test the version payload."""
        response = await client.get("/version")
        assert response.status_code == 200
        assert response.json() == {"name": "PokeCatalog", "version": "1.0.0"}
