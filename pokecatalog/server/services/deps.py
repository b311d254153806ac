"""
Request Dependencies.

Builds the request-scoped collaborators of the endpoints: the catalog and
account services bound to the request's database session, the shared PokeAPI
client, image storage and the identity carried by the session cookie.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pokecatalog.auth.service import AccountService
from pokecatalog.catalog.enrichment import PokeApiClient
from pokecatalog.catalog.errors import UnauthorizedError
from pokecatalog.catalog.images import ImageStorage
from pokecatalog.catalog.service import CatalogService
from pokecatalog.core.database.repositories import PokemonRepository, UserRepository
from pokecatalog.core.database.session import get_session
from pokecatalog.server.core.config import settings

SESSION_USER_KEY = "user_id"

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_image_storage() -> ImageStorage:
    return ImageStorage(settings.uploads.dir, url_prefix=settings.uploads.url_prefix)


def get_pokeapi_client(request: Request) -> Optional[PokeApiClient]:
    """Return the application-wide PokeAPI client, or None when enrichment is disabled."""
    return getattr(request.app.state, "pokeapi_client", None)


def get_catalog_service(
    session: SessionDep,
    images: Annotated[ImageStorage, Depends(get_image_storage)],
    enrichment: Annotated[Optional[PokeApiClient], Depends(get_pokeapi_client)],
) -> CatalogService:
    return CatalogService(PokemonRepository(session), images, enrichment)


def get_account_service(session: SessionDep) -> AccountService:
    return AccountService(UserRepository(session), min_password_length=settings.auth.min_password_length)


def get_current_user_id(request: Request) -> Optional[str]:
    """Identity id stored in the signed session cookie, if any."""
    return request.session.get(SESSION_USER_KEY)


def require_user_id(user_id: Annotated[Optional[str], Depends(get_current_user_id)]) -> str:
    """
    Require an authenticated identity.

    Raises:
        UnauthorizedError: no identity in the session (HTTP 401)
    """
    if not user_id:
        raise UnauthorizedError()
    return user_id


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
RequiredUserIdDep = Annotated[str, Depends(require_user_id)]
