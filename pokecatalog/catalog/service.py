"""
Catalog service.

Composes the query builder, the record repository, the authorization gate,
image storage and the optional enrichment client into the operations the HTTP
layer exposes. Dependencies are injected; the service never creates its own
session or client.

Mutations and lookups by id return a ``ServiceResult``. SQLAlchemy exceptions
are translated here and never leave the service:

- ``IntegrityError`` on insert/update -> ``CONFLICT`` (duplicate name)
- ``StaleDataError`` on update, zero rows on delete -> ``NOT_FOUND``
- any other ``SQLAlchemyError`` -> ``DATA_ACCESS_FAILURE``
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from pokecatalog.core.database.entities.pokemon import Pokemon
from pokecatalog.core.database.repositories.pokemon import PokemonRepository
from pokecatalog.core.logging_config import get_logger
from pokecatalog.core.models.io.pokemon import (
    PokeApiDetails,
    PokemonCreate,
    PokemonNavItem,
    PokemonUpdate,
)

from .authorization import authorize
from .enrichment import PokeApiClient
from .errors import DataAccessError, UnauthorizedError
from .images import ImageStorage, ImageUpload
from .query_builder import PokemonFilters, PokemonQueryBuilder, SortOrder
from .results import ServiceResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaginatedPokemon:
    items: List[Pokemon]
    total_items: int
    current_page: int
    total_pages: int
    page_size: int


@dataclass(frozen=True)
class PokemonDetails:
    """A record plus its enrichment; ``poke_api_details`` is None when unavailable."""

    record: Pokemon
    poke_api_details: Optional[PokeApiDetails] = None


def _has_upload(image: Optional[ImageUpload]) -> bool:
    return image is not None and not image.is_empty


class CatalogService:
    """Application service for catalog records."""

    def __init__(
        self,
        repository: PokemonRepository,
        images: ImageStorage,
        enrichment: Optional[PokeApiClient] = None,
        query_builder: Optional[PokemonQueryBuilder] = None,
    ) -> None:
        self._repository = repository
        self._images = images
        self._enrichment = enrichment
        self._query_builder = query_builder or PokemonQueryBuilder()

    async def list(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Union[str, SortOrder, None] = None,
        filters: Optional[PokemonFilters] = None,
    ) -> PaginatedPokemon:
        """Return one page of records.

        Raises:
            CatalogValidationError: invalid sort order or inverted range filter
            DataAccessError: the store could not be read
        """
        query = self._query_builder.build(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order, filters=filters)
        try:
            items, total = await self._repository.find_page(query)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching pokemon page: {e}")
            raise DataAccessError("error fetching pokemon data. please try again later.") from e

        return PaginatedPokemon(
            items=items,
            total_items=total,
            current_page=query.page,
            total_pages=math.ceil(total / query.page_size),
            page_size=query.page_size,
        )

    async def get_by_id(self, pokemon_id: int, *, with_details: bool = False) -> ServiceResult[PokemonDetails]:
        try:
            record = await self._repository.get_by_id(pokemon_id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching pokemon {pokemon_id}: {e}")
            return ServiceResult.data_access_failure("Error fetching Pokemon data")
        if record is None:
            return ServiceResult.not_found()

        details = None
        if with_details and self._enrichment is not None:
            details = await self._enrichment.fetch_details(record.name)
        return ServiceResult.success(PokemonDetails(record=record, poke_api_details=details))

    async def create(
        self,
        data: PokemonCreate,
        owner_id: Optional[str],
        image: Optional[ImageUpload] = None,
    ) -> ServiceResult[Pokemon]:
        """Create a record owned by ``owner_id``.

        An uploaded image takes precedence over ``data.image`` and is removed
        again when the insert fails.
        """
        if not owner_id:
            raise UnauthorizedError()

        stored_image = self._images.save(image) if _has_upload(image) else None
        record = Pokemon(
            name=data.name,
            height=data.height,
            weight=data.weight,
            image=stored_image or data.image,
            owner_id=owner_id,
        )
        try:
            record = await self._repository.create(record)
        except IntegrityError:
            self._images.delete_if_exists(stored_image)
            logger.info(f"Rejected duplicate pokemon name {data.name!r}")
            return ServiceResult.conflict()
        except SQLAlchemyError as e:
            self._images.delete_if_exists(stored_image)
            logger.error(f"Error creating pokemon {data.name!r}: {e}")
            return ServiceResult.data_access_failure("Error creating pokemon")

        logger.info(f"Created pokemon {record.id} ({record.name}) for user {owner_id}")
        return ServiceResult.success(record)

    async def update(
        self,
        pokemon_id: int,
        changes: Optional[PokemonUpdate],
        acting_user_id: Optional[str],
        image: Optional[ImageUpload] = None,
        remove_image: bool = False,
    ) -> ServiceResult[Pokemon]:
        """Apply a partial update on behalf of ``acting_user_id``.

        Only fields that differ from the stored record are written; when
        nothing differs the current record is returned unchanged. A new upload
        wins over ``remove_image``. The replaced uploaded file is deleted once
        the update is committed.
        """
        try:
            record = await self._repository.get_by_id(pokemon_id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching pokemon {pokemon_id} for update: {e}")
            return ServiceResult.data_access_failure("Error updating pokemon")
        if record is None:
            return ServiceResult.not_found()

        decision = authorize(record, acting_user_id)
        if not decision.allowed:
            logger.info(f"Denied update of pokemon {pokemon_id} for user {acting_user_id}: {decision.reason.value}")
            return ServiceResult.forbidden(decision.message)

        requested = changes.changes() if changes is not None else {}
        if remove_image and not _has_upload(image):
            requested["image"] = None
        diff = {field: value for field, value in requested.items() if getattr(record, field) != value}
        if not diff and not _has_upload(image):
            return ServiceResult.success(record)

        previous_image = record.image
        stored_image = None
        if _has_upload(image):
            stored_image = diff["image"] = self._images.save(image)
        for field, value in diff.items():
            setattr(record, field, value)

        try:
            record = await self._repository.update(record)
        except StaleDataError:
            self._images.delete_if_exists(stored_image)
            return ServiceResult.not_found()
        except IntegrityError:
            self._images.delete_if_exists(stored_image)
            return ServiceResult.conflict()
        except SQLAlchemyError as e:
            self._images.delete_if_exists(stored_image)
            logger.error(f"Error updating pokemon {pokemon_id}: {e}")
            return ServiceResult.data_access_failure("Error updating pokemon")

        if "image" in diff and previous_image != record.image:
            self._images.delete_if_exists(previous_image)
        logger.info(f"Updated pokemon {pokemon_id} fields {sorted(diff)}")
        return ServiceResult.success(record)

    async def delete(self, pokemon_id: int, acting_user_id: Optional[str]) -> ServiceResult[None]:
        try:
            record = await self._repository.get_by_id(pokemon_id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching pokemon {pokemon_id} for delete: {e}")
            return ServiceResult.data_access_failure("Error deleting pokemon")
        if record is None:
            return ServiceResult.not_found()

        decision = authorize(record, acting_user_id)
        if not decision.allowed:
            logger.info(f"Denied delete of pokemon {pokemon_id} for user {acting_user_id}: {decision.reason.value}")
            return ServiceResult.forbidden(decision.message)

        image_path = record.image
        try:
            deleted = await self._repository.delete(pokemon_id)
        except SQLAlchemyError as e:
            logger.error(f"Error deleting pokemon {pokemon_id}: {e}")
            return ServiceResult.data_access_failure("Error deleting pokemon")
        if not deleted:
            return ServiceResult.not_found()

        self._images.delete_if_exists(image_path)
        logger.info(f"Deleted pokemon {pokemon_id}")
        return ServiceResult.success()

    async def list_id_and_name(self) -> List[PokemonNavItem]:
        """Return every record's id and name in ascending id order.

        Raises:
            DataAccessError: the store could not be read
        """
        try:
            rows = await self._repository.list_id_and_name()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching pokemon navigation list: {e}")
            raise DataAccessError("Error fetching pokemon list for navigation") from e
        return [PokemonNavItem(id=pokemon_id, name=name) for pokemon_id, name in rows]
