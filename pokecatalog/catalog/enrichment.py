"""
PokeAPI enrichment client.

Responsibilities:
- fetch_details: best-effort lookup of supplementary attributes for a record
- list_pokemon / get_pokemon: raw access used by the seeder

``fetch_details`` never raises: transport errors, non-2xx responses and
malformed payloads are logged as warnings and reported as ``None`` so a
detail view can still show the local record.
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pokecatalog.core.logging_config import get_logger
from pokecatalog.core.models.io.pokemon import PokeApiAbility, PokeApiDetails, PokeApiStat

logger = get_logger(__name__)

PREFERRED_DESCRIPTION_VERSIONS: tuple[str, ...] = (
    "scarlet",
    "violet",
    "sword",
    "shield",
    "sun",
    "moon",
    "ultra-sun",
    "ultra-moon",
    "lets-go-pikachu",
    "lets-go-eevee",
    "x",
    "y",
    "omega-ruby",
    "alpha-sapphire",
)
NO_DESCRIPTION = "No description available."
UNKNOWN_CATEGORY = "Unknown"


class PokeApiError(Exception):
    """Raised by the raw PokeAPI calls.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code of the failed response, if any.
        details: Response body or other diagnostic payload.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


# Payload DTOs: only the fields used here, everything else is ignored.


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class NamedResourceDTO(_Payload):
    name: str
    url: Optional[str] = None


class FlavorTextDTO(_Payload):
    flavor_text: str
    language: NamedResourceDTO
    version: Optional[NamedResourceDTO] = None


class GenusDTO(_Payload):
    genus: str
    language: NamedResourceDTO


class TypeSlotDTO(_Payload):
    type: NamedResourceDTO


class AbilitySlotDTO(_Payload):
    ability: NamedResourceDTO
    is_hidden: bool = False


class StatDTO(_Payload):
    stat: NamedResourceDTO
    base_stat: int


class PokemonPayloadDTO(_Payload):
    id: int
    name: str
    height: Optional[float] = None
    weight: Optional[float] = None
    types: List[TypeSlotDTO] = Field(default_factory=list)
    abilities: List[AbilitySlotDTO] = Field(default_factory=list)
    stats: List[StatDTO] = Field(default_factory=list)
    sprites: dict = Field(default_factory=dict)

    @property
    def official_artwork(self) -> Optional[str]:
        other = self.sprites.get("other") or {}
        artwork = other.get("official-artwork") or {}
        return artwork.get("front_default")


class SpeciesPayloadDTO(_Payload):
    gender_rate: int = -1
    flavor_text_entries: List[FlavorTextDTO] = Field(default_factory=list)
    genera: List[GenusDTO] = Field(default_factory=list)


class PokemonListPayloadDTO(_Payload):
    count: Optional[int] = None
    results: List[NamedResourceDTO] = Field(default_factory=list)


def select_description(entries: List[FlavorTextDTO]) -> str:
    """Pick the English flavor text from the most preferred game version."""
    english = [entry for entry in entries if entry.language.name == "en"]
    if not english:
        return NO_DESCRIPTION
    chosen = english[0]
    for version in PREFERRED_DESCRIPTION_VERSIONS:
        match = next((e for e in english if e.version is not None and e.version.name == version), None)
        if match is not None:
            chosen = match
            break
    return chosen.flavor_text.replace("\f", " ").replace("\n", " ")


def select_category(genera: List[GenusDTO]) -> str:
    for genus in genera:
        if genus.language.name == "en" and genus.genus:
            return genus.genus
    return UNKNOWN_CATEGORY


def derive_gender(gender_rate: int) -> str:
    """Describe the gender split encoded by PokeAPI's ``gender_rate`` (eighths female).

    >>> derive_gender(4)
    'M: 50%, F: 50%'
    >>> derive_gender(1)
    'M: 87.5%, F: 12.5%'
    """
    if gender_rate == -1:
        return "Genderless"
    female = gender_rate / 8 * 100
    male = 100 - female
    if female == 0:
        return "Male only"
    if male == 0:
        return "Female only"
    return f"M: {male:g}%, F: {female:g}%"


def build_details(pokemon: PokemonPayloadDTO, species: SpeciesPayloadDTO) -> PokeApiDetails:
    return PokeApiDetails(
        pokedex_id=pokemon.id,
        description=select_description(species.flavor_text_entries),
        category=select_category(species.genera),
        types=[slot.type.name for slot in pokemon.types],
        abilities=[PokeApiAbility(name=slot.ability.name, is_hidden=slot.is_hidden) for slot in pokemon.abilities],
        stats=[PokeApiStat(name=slot.stat.name, base_stat=slot.base_stat) for slot in pokemon.stats],
        gender=derive_gender(species.gender_rate),
    )


class PokeApiClient:
    """
    Thin async HTTP client for the public PokeAPI.

    The client owns its ``httpx.AsyncClient`` unless one is injected, in
    which case the caller is responsible for closing it.
    """

    def __init__(
        self,
        base_url: str = "https://pokeapi.co/api/v2",
        *,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "PokeApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/{path}"
        logger.debug(f"PokeApiClient: GET {url} params={params}")
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PokeApiError(
                f"PokeAPI request failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PokeApiError(f"PokeAPI request failed: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise PokeApiError("PokeAPI returned a non-JSON body", status_code=response.status_code) from e

    async def get_pokemon(self, name_or_id: str | int) -> PokemonPayloadDTO:
        data = await self._get_json(f"pokemon/{str(name_or_id).lower()}")
        try:
            return PokemonPayloadDTO.model_validate(data)
        except ValidationError as e:
            raise PokeApiError("Unexpected response shape from pokemon endpoint", details=str(e)) from e

    async def get_species(self, name_or_id: str | int) -> SpeciesPayloadDTO:
        data = await self._get_json(f"pokemon-species/{str(name_or_id).lower()}")
        try:
            return SpeciesPayloadDTO.model_validate(data)
        except ValidationError as e:
            raise PokeApiError("Unexpected response shape from pokemon-species endpoint", details=str(e)) from e

    async def list_pokemon(self, limit: int, offset: int = 0) -> List[NamedResourceDTO]:
        data = await self._get_json("pokemon", params={"limit": limit, "offset": offset})
        try:
            return PokemonListPayloadDTO.model_validate(data).results
        except ValidationError as e:
            raise PokeApiError("Unexpected response shape from pokemon list endpoint", details=str(e)) from e

    async def fetch_details(self, name_or_id: str | int) -> Optional[PokeApiDetails]:
        """Fetch supplementary attributes for a record, or None on any failure."""
        # wait for both requests to settle before inspecting either
        pokemon, species = await asyncio.gather(
            self.get_pokemon(name_or_id),
            self.get_species(name_or_id),
            return_exceptions=True,
        )
        for outcome in (pokemon, species):
            if isinstance(outcome, PokeApiError):
                logger.warning(f"Failed to fetch extended details from PokeAPI for {name_or_id}: {outcome}")
                return None
            if isinstance(outcome, BaseException):
                raise outcome
        return build_details(pokemon, species)
