"""
Catalog I/O models for API requests and responses.

These models define the contract between the catalog endpoints and clients
and are kept separate from the database entities.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .base import CamelModel


class PokemonRead(CamelModel):
    """Schema for reading a catalog record."""

    id: int
    name: str
    height: float
    weight: float
    image: Optional[str] = None
    owner_id: Optional[str] = Field(default=None, description="Creating user; null for seeded records")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PaginatedPokemonRead(CamelModel):
    """Paginated list envelope."""

    data: List[PokemonRead]
    total_items: int
    current_page: int
    total_pages: int
    page_size: int


class PokemonNavItem(CamelModel):
    """Lightweight id/name entry used for previous/next navigation."""

    id: int
    name: str


class PokeApiAbility(CamelModel):
    name: str
    is_hidden: bool = False


class PokeApiStat(CamelModel):
    name: str
    base_stat: int


class PokeApiDetails(CamelModel):
    """Supplementary attributes fetched from PokeAPI."""

    pokedex_id: Optional[int] = None
    description: Optional[str] = None
    category: Optional[str] = None
    types: List[str] = Field(default_factory=list)
    abilities: List[PokeApiAbility] = Field(default_factory=list)
    stats: List[PokeApiStat] = Field(default_factory=list)
    gender: Optional[str] = None


class PokemonDetailsRead(PokemonRead):
    """A record combined with its (optional) PokeAPI enrichment."""

    poke_api_details: Optional[PokeApiDetails] = None


class PokemonCreate(CamelModel):
    """Validated fields for creating a record."""

    name: str = Field(min_length=1, max_length=100)
    height: float = Field(ge=0)
    weight: float = Field(ge=0)
    image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class PokemonUpdate(CamelModel):
    """Partial update; only fields explicitly set are applied.

    ``image`` set to None clears the image, an unset ``image`` leaves it alone.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    height: Optional[float] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    def changes(self) -> dict:
        """Return the explicitly provided fields, dropping a null name/height/weight."""
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k == "image"}
