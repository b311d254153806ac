"""
Catalog query construction.

Turns raw pagination, sort and filter inputs into a bounded, validated
``PokemonQuery`` that the repository executes. Normalization rules:

- ``page`` below 1 (or missing) becomes 1; above ``MAX_PAGE`` it becomes ``MAX_PAGE``.
- ``limit`` outside ``ALLOWED_PAGE_SIZES`` (or missing) becomes ``DEFAULT_PAGE_SIZE``.
- An unknown ``sort_by`` is dropped with a warning and no ordering is applied.
- An unknown ``sort_order`` and an inverted range (min > max) are rejected
  with ``CatalogValidationError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from sqlalchemy import ColumnElement, UnaryExpression

from pokecatalog.core.database.entities.pokemon import Pokemon
from pokecatalog.core.logging_config import get_logger

from .errors import CatalogValidationError

logger = get_logger(__name__)

ALLOWED_PAGE_SIZES: tuple[int, ...] = (10, 20, 50)
DEFAULT_PAGE_SIZE = 10
# keeps the computed offset inside a 64-bit integer
MAX_PAGE = 2**31 - 1
SORTABLE_FIELDS: tuple[str, ...] = ("name", "height", "weight")


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PokemonFilters:
    """Optional catalog filters; bounds are inclusive."""

    name: Optional[str] = None
    min_height: Optional[float] = None
    max_height: Optional[float] = None
    min_weight: Optional[float] = None
    max_weight: Optional[float] = None


@dataclass(frozen=True)
class PokemonQuery:
    """Store query descriptor produced by ``PokemonQueryBuilder``."""

    predicate: tuple[ColumnElement[bool], ...]
    ordering: tuple[UnaryExpression, ...]
    offset: int
    limit: int
    page: int

    @property
    def page_size(self) -> int:
        return self.limit


def resolve_page(page: Optional[int]) -> int:
    if page is None:
        return 1
    return min(max(1, page), MAX_PAGE)


def resolve_page_size(limit: Optional[int]) -> int:
    if limit in ALLOWED_PAGE_SIZES:
        return limit
    return DEFAULT_PAGE_SIZE


def resolve_sort_order(sort_order: Union[str, SortOrder, None]) -> SortOrder:
    if sort_order is None or sort_order == "":
        return SortOrder.ASC
    if isinstance(sort_order, SortOrder):
        return sort_order
    try:
        return SortOrder(sort_order.lower())
    except ValueError:
        raise CatalogValidationError(
            "invalid sortOrder parameter. must be 'asc' or 'desc'.", field="sortOrder"
        ) from None


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _check_range(dimension: str, low: Optional[float], high: Optional[float]) -> None:
    if low is not None and high is not None and low > high:
        capitalized = dimension.capitalize()
        raise CatalogValidationError(
            f"invalid {dimension} range: min{capitalized} cannot be greater than max{capitalized}.",
            field=f"min{capitalized}",
        )


class PokemonQueryBuilder:
    """Builds ``PokemonQuery`` instances from request parameters."""

    def build(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Union[str, SortOrder, None] = None,
        filters: Optional[PokemonFilters] = None,
    ) -> PokemonQuery:
        """
        Build a validated store query.

        Args:
            page: Requested 1-based page number.
            limit: Requested page size.
            sort_by: Field to sort by, one of ``SORTABLE_FIELDS``.
            sort_order: ``asc`` or ``desc``.
            filters: Optional name and range filters.

        Returns:
            PokemonQuery with the page and page size actually used.

        Raises:
            CatalogValidationError: invalid sort order or inverted range.
        """
        order = resolve_sort_order(sort_order)
        predicate = self.build_predicate(filters or PokemonFilters())
        current_page = resolve_page(page)
        page_size = resolve_page_size(limit)

        return PokemonQuery(
            predicate=predicate,
            ordering=self.build_ordering(sort_by, order),
            offset=(current_page - 1) * page_size,
            limit=page_size,
            page=current_page,
        )

    @staticmethod
    def build_predicate(filters: PokemonFilters) -> tuple[ColumnElement[bool], ...]:
        _check_range("height", filters.min_height, filters.max_height)
        _check_range("weight", filters.min_weight, filters.max_weight)

        clauses: list[ColumnElement[bool]] = []
        if filters.name:
            clauses.append(Pokemon.name.ilike(f"%{_escape_like(filters.name)}%", escape="\\"))
        if filters.min_height is not None:
            clauses.append(Pokemon.height >= filters.min_height)
        if filters.max_height is not None:
            clauses.append(Pokemon.height <= filters.max_height)
        if filters.min_weight is not None:
            clauses.append(Pokemon.weight >= filters.min_weight)
        if filters.max_weight is not None:
            clauses.append(Pokemon.weight <= filters.max_weight)
        return tuple(clauses)

    @staticmethod
    def build_ordering(sort_by: Optional[str], order: SortOrder) -> tuple[UnaryExpression, ...]:
        if not sort_by:
            return ()
        if sort_by not in SORTABLE_FIELDS:
            logger.warning(f"invalid sortBy field: {sort_by}. defaulting to no sort.")
            return ()
        column = getattr(Pokemon, sort_by)
        primary = column.desc() if order is SortOrder.DESC else column.asc()
        # id breaks ties so equal heights/weights paginate deterministically
        return (primary, Pokemon.id.asc())
