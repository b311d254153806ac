"""PokeCatalog.

This package contains a catalog service for Pokemon records: a searchable,
filterable and paginated collection where authenticated users create, edit
and delete their own entries, and every entry can be enriched with details
fetched from the public PokeAPI.

High-level architecture
-----------------------

- ``pokecatalog.core``:

  - Logging and optional Logfire monitoring.
  - SQLModel entities and async repositories for the record store.
  - I/O schemas shared by the HTTP layer.

- ``pokecatalog.catalog``:

  - The query builder turning page/limit/sort/filter parameters into a bounded
    store query.
  - The ownership-based authorization gate.
  - ``CatalogService``, the single seam between the HTTP layer and the store.
  - The best-effort PokeAPI enrichment client and uploaded image storage.

- ``pokecatalog.auth``: registration, password hashing and credential checks.

- ``pokecatalog.server``: the FastAPI application.

Records without an owner are seed data and can never be modified; every other
record can only be changed or deleted by the user who created it.
"""
