"""
Pokemon entity model.

This module contains the database entity for catalog records. A record with
no owner is seed data and is never mutated; every other record belongs to the
user who created it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now

# largest value the INTEGER primary key holds on every supported backend
MAX_POKEMON_ID = 2**31 - 1


class PokemonBase(Base):
    """Base fields for a catalog record."""

    name: str = Field(unique=True, index=True, max_length=100, description="Unique record name")
    height: float = Field(description="Height magnitude (decimetres for PokeAPI data)")
    weight: float = Field(description="Weight magnitude (hectograms for PokeAPI data)")
    image: Optional[str] = Field(default=None, max_length=2048, description="Image path or URL")


class Pokemon(PokemonBase, table=True):
    """Persistent catalog record.

    Table: pokemon
    """

    __tablename__ = "pokemon"

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: Optional[str] = Field(
        default=None,
        foreign_key="users.id",
        index=True,
        description="Creating user; None for seeded records",
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )

    def __repr__(self) -> str:
        return f"Pokemon(id={self.id}, name={self.name}, owner={self.owner_id})"
