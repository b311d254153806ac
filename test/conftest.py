from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Iterable, Optional

import httpx
import pytest
from dotenv import load_dotenv

TEST_ROOT = Path(__file__).resolve().parent

# Load test/.env first so local overrides win over the defaults below
load_dotenv(TEST_ROOT / ".env", override=False)

# Settings are read when pokecatalog modules are first imported, so the test
# defaults must be in place before any of them is imported.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("DATABASE__URL", TEST_DATABASE_URL)
os.environ.setdefault("DATABASE__AUTO_CREATE", "false")
os.environ.setdefault("POKEAPI__ENABLED", "false")
os.environ.setdefault("UPLOADS__DIR", str(Path(tempfile.gettempdir()) / "pokecatalog-test-uploads"))
os.environ.setdefault("LOGFIRE_ENABLED", "false")

import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from pokecatalog.catalog.images import ImageStorage  # noqa: E402
from pokecatalog.core.database.base import Base  # noqa: E402
from pokecatalog.core.database.entities import Pokemon, User  # noqa: E402
from pokecatalog.core.database.repositories import PokemonRepository, UserRepository  # noqa: E402
from pokecatalog.core.database.utils import create_sessionmaker  # noqa: E402


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    """Fail fast on any outbound HTTP call; tests talk to mock hosts only."""
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://testserver",
        "http://localhost",
        "http://127.0.0.1",
        "/",  # relative paths (ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(self._merge_url(url))
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(self._merge_url(url))
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(engine)() as session:
        yield session


@pytest.fixture
def pokemon_repository(session: AsyncSession) -> PokemonRepository:
    return PokemonRepository(session)


@pytest.fixture
def user_repository(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def image_storage(tmp_path: Path) -> ImageStorage:
    return ImageStorage(tmp_path / "uploads", url_prefix="/uploads/pokemon")


@pytest.fixture
def make_user(session: AsyncSession):
    """Factory inserting a user row directly."""

    async def _make(email: str = "ash@example.com", name: Optional[str] = None) -> User:
        user = User(email=email, name=name or email, password_hash="not-a-real-hash")
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_pokemon(session: AsyncSession):
    """Factory inserting a catalog record directly; ``owner_id=None`` makes it seeded."""

    async def _make(
        name: str,
        height: float = 7.0,
        weight: float = 69.0,
        owner_id: Optional[str] = None,
        image: Optional[str] = None,
    ) -> Pokemon:
        record = Pokemon(name=name, height=height, weight=weight, owner_id=owner_id, image=image)
        session.add(record)
        await session.commit()
        await session.refresh(record)
        return record

    return _make
