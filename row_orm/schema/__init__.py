"""Schema layer - entity reflection, relation configuration and reporting."""

from __future__ import annotations

from row_orm.schema.configurator import EntityConfigurator, RelationConfigurator
from row_orm.schema.field import Field, FieldType
from row_orm.schema.protocol import Entity
from row_orm.schema.relations import (
    BelongsTo,
    BelongsToMany,
    HasMany,
    HasOne,
    RelationConfig,
)
from row_orm.schema.schema import Schema, schema_of, table_name_of

__all__ = [
    "Entity",
    "EntityConfigurator",
    "RelationConfigurator",
    "Field",
    "FieldType",
    "Schema",
    "schema_of",
    "table_name_of",
    "RelationConfig",
    "HasOne",
    "HasMany",
    "BelongsTo",
    "BelongsToMany",
]
