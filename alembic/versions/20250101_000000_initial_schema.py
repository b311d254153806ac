"""Initial schema for PokeCatalog

Revision ID: 20250101_000000
Revises: None
Create Date: 2025-01-01 00:00:00.000000

Creates the account and catalog tables:
- users: registered accounts (unique email)
- pokemon: catalog records (unique name, nullable owner; null owner = seeded record)

Seed records are not inserted here; run ``python -m pokecatalog.seed``.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20250101_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users and pokemon tables."""

    op.create_table(
        "users",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "pokemon",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("image", sa.String(2048), nullable=True),
        sa.Column("owner_id", sa.String(32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
    )
    op.create_index("ix_pokemon_name", "pokemon", ["name"], unique=True)
    op.create_index("ix_pokemon_owner_id", "pokemon", ["owner_id"])


def downgrade() -> None:
    """Drop the catalog and account tables."""
    op.drop_index("ix_pokemon_owner_id", table_name="pokemon")
    op.drop_index("ix_pokemon_name", table_name="pokemon")
    op.drop_table("pokemon")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
