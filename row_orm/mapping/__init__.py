"""Mapping layer - bind rows into entities and resolve relations."""

from __future__ import annotations

from row_orm.mapping.binder import EntityBinder, bind, convert_value, rows_to_dicts
from row_orm.mapping.relations import (
    RelationQuery,
    belongs_to_many_query,
    belongs_to_query,
    has_many_query,
    has_one_query,
)

__all__ = [
    "EntityBinder",
    "bind",
    "convert_value",
    "rows_to_dicts",
    "RelationQuery",
    "has_one_query",
    "has_many_query",
    "belongs_to_query",
    "belongs_to_many_query",
]
