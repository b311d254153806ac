"""
Catalog domain core.

Modules:
- query_builder: page/limit/sort/filter normalization into a store query
- authorization: ownership gate for mutations
- results: tagged ``ServiceResult`` returned by service operations
- errors: typed catalog errors carrying an HTTP status
- service: ``CatalogService`` composing the pieces above
- enrichment: best-effort PokeAPI client
- images: local storage for uploaded images

``service`` is not re-exported here because it depends on the repository
layer, which itself imports ``query_builder``.
"""

from .authorization import AuthorizationDecision, DenialReason, authorize
from .errors import (
    CatalogError,
    CatalogValidationError,
    ConflictError,
    DataAccessError,
    DuplicateEmailError,
    DuplicateNameError,
    ForbiddenError,
    InvalidCredentialsError,
    RecordNotFoundError,
    UnauthorizedError,
)
from .query_builder import (
    ALLOWED_PAGE_SIZES,
    DEFAULT_PAGE_SIZE,
    SORTABLE_FIELDS,
    PokemonFilters,
    PokemonQuery,
    PokemonQueryBuilder,
    SortOrder,
)
from .results import Outcome, ServiceResult

__all__ = [
    "ALLOWED_PAGE_SIZES",
    "AuthorizationDecision",
    "CatalogError",
    "CatalogValidationError",
    "ConflictError",
    "DEFAULT_PAGE_SIZE",
    "DataAccessError",
    "DenialReason",
    "DuplicateEmailError",
    "DuplicateNameError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "Outcome",
    "PokemonFilters",
    "PokemonQuery",
    "PokemonQueryBuilder",
    "RecordNotFoundError",
    "SORTABLE_FIELDS",
    "ServiceResult",
    "SortOrder",
    "UnauthorizedError",
    "authorize",
]
