from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from pokecatalog.auth.service import AccountService
from pokecatalog.catalog.enrichment import PokeApiClient
from pokecatalog.catalog.images import ImageStorage
from pokecatalog.core.database.repositories import UserRepository

TEST_PASSWORD = "pikapika"


@pytest.fixture
def enrichment_client() -> Optional[PokeApiClient]:
    """PokeAPI client handed to the catalog service; modules override this fixture."""
    return None


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession,
    image_storage: ImageStorage,
    enrichment_client: Optional[PokeApiClient],
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies.

    ``ASGITransport`` does not run the lifespan, so no database initialization
    or PokeAPI client creation happens; the dependencies are wired to the
    per-test session, upload directory and enrichment client instead.
    """
    from pokecatalog.core.database.session import get_session
    from pokecatalog.server.main import app
    from pokecatalog.server.services.deps import get_account_service, get_image_storage, get_pokeapi_client

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_image_storage] = lambda: image_storage
    app.dependency_overrides[get_pokeapi_client] = lambda: enrichment_client
    # low bcrypt cost keeps registration fast
    app.dependency_overrides[get_account_service] = lambda: AccountService(UserRepository(session), hash_rounds=4)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def login_as(client: AsyncClient):
    """Register (if needed) and log in ``email``; returns the user id."""

    async def _login(email: str = "ash@example.com", password: str = TEST_PASSWORD) -> str:
        await client.post("/api/auth/register", json={"email": email, "password": password})
        response = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["id"]

    return _login
