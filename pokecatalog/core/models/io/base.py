"""
Shared base for API I/O models.

API payloads use camelCase keys while Python code uses snake_case; the alias
generator bridges the two and ``populate_by_name`` keeps both accepted on input.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing fields with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
