"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- pokemon: Catalog record, list envelope and enrichment I/O models
- auth: Registration and login I/O models
"""

from .auth import LoginRequest, RegisterRequest, RegisterResponse, UserRead
from .pokemon import (
    PaginatedPokemonRead,
    PokeApiAbility,
    PokeApiDetails,
    PokeApiStat,
    PokemonCreate,
    PokemonDetailsRead,
    PokemonNavItem,
    PokemonRead,
    PokemonUpdate,
)

__all__ = [
    "LoginRequest",
    "PaginatedPokemonRead",
    "PokeApiAbility",
    "PokeApiDetails",
    "PokeApiStat",
    "PokemonCreate",
    "PokemonDetailsRead",
    "PokemonNavItem",
    "PokemonRead",
    "PokemonUpdate",
    "RegisterRequest",
    "RegisterResponse",
    "UserRead",
]
