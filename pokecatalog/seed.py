"""
Seed the catalog with records imported from PokeAPI.

Seeded records have no owner and are therefore read-only. Re-running the
seeder skips names that already exist.

Usage:
    python -m pokecatalog.seed
    python -m pokecatalog.seed --limit 151 --delay 0
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

from pokecatalog.catalog.enrichment import PokeApiClient, PokeApiError
from pokecatalog.core.database.entities.pokemon import Pokemon
from pokecatalog.core.database.repositories.pokemon import PokemonRepository
from pokecatalog.core.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


async def fetch_seed_records(client: PokeApiClient, limit: int, delay: float = 0.2) -> List[Pokemon]:
    """Fetch the first ``limit`` PokeAPI entries as owner-less records.

    Entries whose details cannot be fetched or lack a name, height or weight
    are skipped with a warning.
    """
    entries = await client.list_pokemon(limit)
    records: List[Pokemon] = []
    for entry in entries:
        try:
            detail = await client.get_pokemon(entry.name)
        except PokeApiError as e:
            logger.warning(f"Failed to fetch details for {entry.name}: {e}")
            continue

        if not detail.name or not detail.height or not detail.weight:
            logger.warning(f"Missing essential data for {entry.name}, skipping")
        else:
            records.append(
                Pokemon(
                    name=detail.name,
                    height=detail.height,
                    weight=detail.weight,
                    image=detail.official_artwork,
                    owner_id=None,
                )
            )
            logger.debug(f"Fetched data for {detail.name}")

        if delay > 0:
            # PokeAPI asks clients to stay well below its rate limit
            await asyncio.sleep(delay)
    return records


async def seed_catalog(repository: PokemonRepository, client: PokeApiClient, limit: int, delay: float = 0.2) -> int:
    """Insert missing seed records and return how many were created."""
    records = await fetch_seed_records(client, limit, delay=delay)
    if not records:
        logger.info("No Pokemon data to create.")
        return 0

    existing = await repository.existing_names(record.name for record in records)
    fresh = [record for record in records if record.name not in existing]
    if not fresh:
        logger.info("All fetched Pokemon are already present.")
        return 0

    created = await repository.add_all(fresh)
    logger.info(f"Created {created} new Pokemon.")
    return created


async def run(limit: int, delay: float, database_url: Optional[str] = None) -> int:
    from pokecatalog.core.database import create_all, create_engine, create_sessionmaker
    from pokecatalog.server.core.config import settings

    engine = create_engine(database_url or settings.database.url, echo=settings.database.echo)
    try:
        if settings.database.auto_create:
            await create_all(engine)
        session_maker = create_sessionmaker(engine)
        async with session_maker() as session, PokeApiClient(
            settings.pokeapi.base_url, timeout=settings.pokeapi.timeout
        ) as client:
            return await seed_catalog(PokemonRepository(session), client, limit, delay=delay)
    finally:
        await engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m pokecatalog.seed",
        description="Import the first N Pokemon from PokeAPI as read-only catalog records.",
    )
    parser.add_argument("--limit", type=int, default=None, help="Number of Pokemon to import (default: POKEAPI__SEED_LIMIT or 50)")
    parser.add_argument("--delay", type=float, default=0.2, help="Pause between detail requests in seconds")
    parser.add_argument("--database-url", default=None, help="Override DATABASE__URL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    from pokecatalog.server.core.config import settings

    limit = args.limit if args.limit is not None else settings.pokeapi.seed_limit
    if limit < 1:
        logger.error("--limit must be at least 1")
        return 2

    logger.info("Start seeding ...")
    try:
        asyncio.run(run(limit, args.delay, args.database_url))
    except PokeApiError as e:
        logger.error(f"Failed to fetch initial Pokemon list from PokeAPI: {e}")
        return 1
    logger.info("Seeding finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
