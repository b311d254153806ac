"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(sessions, CORS, request timing), registers exception handlers, includes the
API routers and serves uploaded images. Run it with
``uvicorn pokecatalog.server.main:app``.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from pokecatalog.catalog.enrichment import PokeApiClient
from pokecatalog.core.database.session import init_db
from pokecatalog.core.logging_config import get_logger, setup_logging
from pokecatalog.core.monitoring import initialize_logfire

from .api.v1 import auth, health, pokemon
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Startup ensures the schema and the upload directory exist and opens the
    shared PokeAPI client; shutdown closes it.
    """
    logger.info(f"Starting up {constant.PROJECT_NAME} Server...")
    try:
        await init_db()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    Path(settings.uploads.dir).mkdir(parents=True, exist_ok=True)

    app.state.pokeapi_client = None
    if settings.pokeapi.enabled:
        app.state.pokeapi_client = PokeApiClient(settings.pokeapi.base_url, timeout=settings.pokeapi.timeout)
    else:
        logger.info("PokeAPI enrichment disabled")

    yield

    logger.info(f"Shutting down {constant.PROJECT_NAME} Server...")
    if app.state.pokeapi_client is not None:
        await app.state.pokeapi_client.aclose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    PokeCatalog Server API

    Browse, search, filter and sort the Pokemon catalog, and manage the records
    you created. Seeded records are read-only; details can be enriched with
    data from PokeAPI.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_PREFIX}/openapi.json",
    docs_url=f"{constant.API_PREFIX}/docs",
    redoc_url=f"{constant.API_PREFIX}/redoc",
    lifespan=lifespan,
)

app.add_middleware(LogfireMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.auth.session_secret,
    session_cookie=settings.auth.session_cookie,
    max_age=settings.auth.session_max_age,
    https_only=settings.auth.https_only,
    same_site="lax",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(pokemon.router, prefix=f"{constant.API_PREFIX}/pokemon")
app.include_router(auth.router, prefix=f"{constant.API_PREFIX}/auth")

app.mount(
    settings.uploads.url_prefix,
    StaticFiles(directory=settings.uploads.dir, check_dir=False),
    name="uploads",
)
if settings.public_dir:
    app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
