"""
API endpoints for catalog records.

Reads are public. Create, update and delete require a logged-in identity and
accept multipart form data so an image file can be uploaded alongside the
fields. Failures surface as ``CatalogError`` subclasses and are rendered by
the catalog exception handler.
"""

from __future__ import annotations

import math
from typing import Annotated, List, Optional

from fastapi import APIRouter, File, Form, Path, Query, Response, UploadFile, status
from pydantic import ValidationError

from pokecatalog.catalog.errors import CatalogValidationError
from pokecatalog.catalog.images import ImageUpload
from pokecatalog.catalog.query_builder import PokemonFilters
from pokecatalog.core.database.entities.pokemon import MAX_POKEMON_ID
from pokecatalog.core.logging_config import get_logger
from pokecatalog.core.models.io.pokemon import (
    PaginatedPokemonRead,
    PokemonCreate,
    PokemonDetailsRead,
    PokemonNavItem,
    PokemonRead,
    PokemonUpdate,
)
from pokecatalog.server.services.deps import CatalogServiceDep, RequiredUserIdDep

logger = get_logger(__name__)

router = APIRouter(tags=["pokemon"])

PokemonId = Annotated[int, Path(ge=1, le=MAX_POKEMON_ID, description="Record id")]


def _parse_bound(value: Optional[str]) -> Optional[float]:
    """Parse a range filter bound; anything that is not a finite number is ignored."""
    if value is None or value.strip() == "":
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_measure(value: str, message: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise CatalogValidationError(message) from None
    if not math.isfinite(number):
        raise CatalogValidationError(message)
    return number


def _validate(model, **fields):
    try:
        return model(**fields)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise CatalogValidationError(f"{field}: {first.get('msg')}", field=field or None) from None


async def _read_upload(image: Optional[UploadFile]) -> Optional[ImageUpload]:
    if image is None or not image.filename:
        return None
    return ImageUpload(filename=image.filename, content=await image.read())


@router.get(
    "",
    response_model=PaginatedPokemonRead,
    summary="List Pokemon",
    description="Return one page of records with optional name/range filters and sorting.",
    responses={
        200: {"description": "Page of records"},
        400: {"description": "Invalid page, limit, sortOrder or range parameters"},
    },
)
async def list_pokemon(
    service: CatalogServiceDep,
    page: Optional[int] = Query(None, description="1-based page number; values below 1 are treated as 1"),
    limit: Optional[int] = Query(None, description="Page size: 10, 20 or 50; anything else falls back to 10"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="name, height or weight"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
    name: Optional[str] = Query(None, description="Case-insensitive name substring"),
    min_height: Optional[str] = Query(None, alias="minHeight"),
    max_height: Optional[str] = Query(None, alias="maxHeight"),
    min_weight: Optional[str] = Query(None, alias="minWeight"),
    max_weight: Optional[str] = Query(None, alias="maxWeight"),
) -> PaginatedPokemonRead:
    """
    List catalog records.

    - **page** / **limit**: pagination window; the response echoes the values used.
    - **sortBy** / **sortOrder**: an unknown sortBy is ignored, an unknown sortOrder is rejected.
    - **name**, **minHeight**, **maxHeight**, **minWeight**, **maxWeight**: filters.
    """
    filters = PokemonFilters(
        name=name or None,
        min_height=_parse_bound(min_height),
        max_height=_parse_bound(max_height),
        min_weight=_parse_bound(min_weight),
        max_weight=_parse_bound(max_weight),
    )
    result = await service.list(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order, filters=filters)
    return PaginatedPokemonRead(
        data=[PokemonRead.model_validate(record) for record in result.items],
        total_items=result.total_items,
        current_page=result.current_page,
        total_pages=result.total_pages,
        page_size=result.page_size,
    )


@router.get(
    "/list-for-nav",
    response_model=List[PokemonNavItem],
    summary="List Pokemon For Navigation",
    description="Return id and name of every record in ascending id order.",
)
async def list_for_nav(service: CatalogServiceDep) -> List[PokemonNavItem]:
    return await service.list_id_and_name()


@router.get(
    "/{pokemon_id}",
    response_model=None,
    summary="Get Pokemon",
    description="Return a single record. With `view=details` the record is combined with PokeAPI data.",
    responses={
        200: {"model": PokemonDetailsRead, "description": "Record found"},
        400: {"description": "Invalid Pokemon ID"},
        404: {"description": "Pokemon not found"},
    },
)
async def get_pokemon(
    pokemon_id: PokemonId,
    service: CatalogServiceDep,
    view: Optional[str] = Query(None, description="Use 'details' to include PokeAPI enrichment"),
) -> PokemonRead | PokemonDetailsRead:
    """
    Get a record by id.

    Enrichment is best effort: when PokeAPI cannot be reached ``pokeApiDetails``
    is null and the local fields are returned unchanged.
    """
    with_details = view == "details"
    details = (await service.get_by_id(pokemon_id, with_details=with_details)).unwrap()
    if not with_details:
        return PokemonRead.model_validate(details.record)
    return PokemonDetailsRead.model_validate(details.record).model_copy(
        update={"poke_api_details": details.poke_api_details}
    )


@router.post(
    "",
    response_model=PokemonRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Pokemon",
    description="Create a record owned by the logged-in user. Accepts multipart form data.",
    responses={
        201: {"description": "Record created"},
        400: {"description": "Missing or invalid fields"},
        401: {"description": "Not logged in"},
        409: {"description": "Name already taken"},
    },
)
async def create_pokemon(
    service: CatalogServiceDep,
    user_id: RequiredUserIdDep,
    name: Optional[str] = Form(None),
    height: Optional[str] = Form(None),
    weight: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
) -> PokemonRead:
    if not name or not height or not weight:
        raise CatalogValidationError("Name, height, and weight are required")
    payload = _validate(
        PokemonCreate,
        name=name,
        height=_parse_measure(height, "Height and weight must be valid numbers"),
        weight=_parse_measure(weight, "Height and weight must be valid numbers"),
    )
    record = (await service.create(payload, user_id, image=await _read_upload(image))).unwrap()
    return PokemonRead.model_validate(record)


@router.put(
    "/{pokemon_id}",
    response_model=PokemonRead,
    summary="Update Pokemon",
    description="Partially update a record owned by the logged-in user. Accepts multipart form data.",
    responses={
        200: {"description": "Record updated (or unchanged when nothing differs)"},
        400: {"description": "Invalid fields"},
        401: {"description": "Not logged in"},
        403: {"description": "Seeded record or not the owner"},
        404: {"description": "Pokemon not found"},
        409: {"description": "Name already taken"},
    },
)
async def update_pokemon(
    pokemon_id: PokemonId,
    service: CatalogServiceDep,
    user_id: RequiredUserIdDep,
    name: Optional[str] = Form(None),
    height: Optional[str] = Form(None),
    weight: Optional[str] = Form(None),
    remove_image: Optional[str] = Form(None, alias="removeImage"),
    image: Optional[UploadFile] = File(None),
) -> PokemonRead:
    """
    Update a record.

    Omitted fields keep their value. ``removeImage=true`` clears the image
    unless a new file is uploaded in the same request.
    """
    fields: dict = {}
    if name:
        fields["name"] = name
    if height:
        fields["height"] = _parse_measure(height, "Height must be a valid number")
    if weight:
        fields["weight"] = _parse_measure(weight, "Weight must be a valid number")
    changes = _validate(PokemonUpdate, **fields)

    result = await service.update(
        pokemon_id,
        changes,
        user_id,
        image=await _read_upload(image),
        remove_image=(remove_image or "").lower() == "true",
    )
    return PokemonRead.model_validate(result.unwrap())


@router.delete(
    "/{pokemon_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Pokemon",
    description="Delete a record owned by the logged-in user.",
    responses={
        204: {"description": "Record deleted"},
        401: {"description": "Not logged in"},
        403: {"description": "Seeded record or not the owner"},
        404: {"description": "Pokemon not found"},
    },
)
async def delete_pokemon(pokemon_id: PokemonId, service: CatalogServiceDep, user_id: RequiredUserIdDep) -> Response:
    (await service.delete(pokemon_id, user_id)).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
