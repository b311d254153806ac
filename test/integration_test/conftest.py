from typing import AsyncGenerator

import httpx
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from pokecatalog.auth.service import AccountService
from pokecatalog.catalog.enrichment import PokeApiClient
from pokecatalog.core.database.repositories import UserRepository

POKEAPI_BASE_URL = "http://mock/api/v2"

BULBASAUR = {
    "id": 1,
    "name": "bulbasaur",
    "height": 7,
    "weight": 69,
    "types": [{"slot": 1, "type": {"name": "grass"}}, {"slot": 2, "type": {"name": "poison"}}],
    "abilities": [{"ability": {"name": "overgrow"}, "is_hidden": False}],
    "stats": [{"base_stat": 45, "stat": {"name": "hp"}}],
    "sprites": {},
}

BULBASAUR_SPECIES = {
    "gender_rate": 1,
    "flavor_text_entries": [
        {
            "flavor_text": "A strange seed was\nplanted on its\fback at birth.",
            "language": {"name": "en"},
            "version": {"name": "red"},
        }
    ],
    "genera": [{"genus": "Seed Pokémon", "language": {"name": "en"}}],
}


def pokeapi_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/v2/pokemon/bulbasaur":
        return httpx.Response(200, json=BULBASAUR)
    if request.url.path == "/api/v2/pokemon-species/bulbasaur":
        return httpx.Response(200, json=BULBASAUR_SPECIES)
    return httpx.Response(404, json={"detail": "Not found"})


@pytest_asyncio.fixture(name="pokeapi_client")
async def pokeapi_client_fixture() -> AsyncGenerator[PokeApiClient, None]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(pokeapi_handler)) as http:
        yield PokeApiClient(POKEAPI_BASE_URL, client=http)


@pytest_asyncio.fixture(name="api")
async def api_fixture(session: AsyncSession, pokeapi_client: PokeApiClient) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the real application.

    Only the database session, the PokeAPI client and the bcrypt cost are
    replaced; uploads go to the configured directory and are served by the
    application's static mount.
    """
    from pokecatalog.core.database.session import get_session
    from pokecatalog.server.main import app
    from pokecatalog.server.services.deps import get_account_service, get_pokeapi_client

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_pokeapi_client] = lambda: pokeapi_client
    app.dependency_overrides[get_account_service] = lambda: AccountService(UserRepository(session), hash_rounds=4)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()
