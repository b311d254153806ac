"""
Pokemon repository.

Data access for catalog records. The repository lets SQLAlchemy errors
propagate (after rolling the session back) so the catalog service can
translate them: ``IntegrityError`` for a duplicate name, ``StaleDataError``
when the row vanished during an update.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy import func
from sqlmodel import select

from pokecatalog.catalog.query_builder import PokemonQuery
from pokecatalog.core.logging_config import get_logger

from ..base import utc_now
from ..entities.pokemon import MAX_POKEMON_ID, Pokemon
from .base import AsyncBaseRepository, QueryBuilder

logger = get_logger(__name__)


def _storable_id(pokemon_id: int) -> bool:
    # ids outside the column range cannot match a row and would fail to bind
    return -MAX_POKEMON_ID - 1 <= pokemon_id <= MAX_POKEMON_ID


class PokemonRepository(AsyncBaseRepository[Pokemon]):
    """Repository for catalog records using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, Pokemon)

    async def create(self, pokemon: Pokemon) -> Pokemon:
        """Insert a record.

        Raises:
            sqlalchemy.exc.IntegrityError: the name is already taken.
        """
        self.session.add(pokemon)
        await self._commit()
        await self.session.refresh(pokemon)
        return pokemon

    async def get_by_id(self, pokemon_id: int) -> Optional[Pokemon]:
        if not _storable_id(pokemon_id):
            return None
        stmt = select(Pokemon).where(Pokemon.id == pokemon_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Pokemon]:
        stmt = select(Pokemon).where(Pokemon.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, pokemon: Pokemon) -> Pokemon:
        """Persist changed fields of a loaded record.

        Raises:
            sqlalchemy.exc.IntegrityError: the new name is already taken.
            sqlalchemy.orm.exc.StaleDataError: the row was deleted concurrently.
        """
        pokemon.updated_at = utc_now()
        self.session.add(pokemon)
        await self._commit()
        await self.session.refresh(pokemon)
        return pokemon

    async def delete(self, pokemon_id: int) -> bool:
        """Delete a record by id.

        Returns:
            True if a row was deleted, False if no row matched.
        """
        if not _storable_id(pokemon_id):
            return False
        result = await self.session.execute(sa_delete(Pokemon).where(Pokemon.id == pokemon_id))
        await self._commit()
        return (result.rowcount or 0) > 0

    async def find_page(self, query: PokemonQuery) -> Tuple[List[Pokemon], int]:
        """Fetch one page of records and the total match count.

        Both statements share the query's predicate and run inside a single
        transaction, so the count always describes the same snapshot as the
        returned slice.

        Args:
            query: Validated query from ``PokemonQueryBuilder``

        Returns:
            Tuple of (records on the page, total number of matching records)
        """
        items_stmt = select(Pokemon)
        count_stmt = select(func.count()).select_from(Pokemon)
        if query.predicate:
            items_stmt = items_stmt.where(*query.predicate)
            count_stmt = count_stmt.where(*query.predicate)
        if query.ordering:
            items_stmt = items_stmt.order_by(*query.ordering)
        items_stmt = QueryBuilder.apply_pagination(items_stmt, query.limit, query.offset)

        if self.session.in_transaction():
            return await self._read_page(items_stmt, count_stmt)

        async with self.session.begin():
            await self._pin_snapshot()
            return await self._read_page(items_stmt, count_stmt)

    async def list_id_and_name(self) -> List[Tuple[int, str]]:
        """Return ``(id, name)`` pairs ordered by ascending id."""
        stmt = select(Pokemon.id, Pokemon.name).order_by(Pokemon.id.asc())
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def existing_names(self, names: Iterable[str]) -> set[str]:
        """Return the subset of ``names`` already present in the catalog."""
        wanted = list(names)
        if not wanted:
            return set()
        stmt = select(Pokemon.name).where(Pokemon.name.in_(wanted))
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def add_all(self, records: Iterable[Pokemon]) -> int:
        """Insert several records in one transaction and return how many were added."""
        batch = list(records)
        self.session.add_all(batch)
        await self._commit()
        return len(batch)

    async def _read_page(self, items_stmt, count_stmt) -> Tuple[List[Pokemon], int]:
        items = await self.session.execute(items_stmt)
        total = await self.session.execute(count_stmt)
        return list(items.scalars().all()), int(total.scalar_one())

    async def _pin_snapshot(self) -> None:
        # SQLite transactions are already serializable; PostgreSQL defaults to
        # READ COMMITTED, where the two statements could see different data.
        if self.session.get_bind().dialect.name == "postgresql":
            await self.session.connection(execution_options={"isolation_level": "REPEATABLE READ"})
