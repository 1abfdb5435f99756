"""RowORM - entity mapping and fluent SQL statement building."""

from __future__ import annotations

from row_orm.builder import Delete, Insert, Select, Update, helpers
from row_orm.core.connection import (
    AsyncConnection,
    Connection,
    ConnectionConfig,
    ExecResult,
)
from row_orm.core.dialect import MYSQL, POSTGRESQL, SQLITE3, Dialect, get_dialect
from row_orm.core.engine import AsyncEngine, Engine
from row_orm.core.enums import DatabaseBackend, JoinType
from row_orm.core.exceptions import (
    AdapterError,
    BatchInsertError,
    ConfigurationError,
    ConnectionError,  # noqa: A004
    ConnectionNotFoundError,
    DialectNotFoundError,
    DuplicateTableError,
    EntityNotRegisteredError,
    ExecutionError,
    FieldConversionError,
    MappingError,
    MissingIntermediateTableError,
    MissingTableNameError,
    NotFoundError,
    PrimaryKeyError,
    QueryBuildError,
    RelationConfigError,
    RowORMError,
)
from row_orm.core.registry import ConnectionRegistry
from row_orm.mapping.binder import EntityBinder
from row_orm.repository.base import AsyncRepository, Repository
from row_orm.schema import (
    BelongsTo,
    BelongsToMany,
    Entity,
    EntityConfigurator,
    Field,
    FieldType,
    HasMany,
    HasOne,
    RelationConfigurator,
    Schema,
    schema_of,
)

__all__ = [
    # Connection
    "ConnectionConfig",
    "Connection",
    "AsyncConnection",
    "ExecResult",
    "ConnectionRegistry",
    # Dialects
    "Dialect",
    "MYSQL",
    "SQLITE3",
    "POSTGRESQL",
    "get_dialect",
    # Engine
    "Engine",
    "AsyncEngine",
    # Builder
    "Select",
    "Insert",
    "Update",
    "Delete",
    "helpers",
    # Schema
    "Entity",
    "EntityConfigurator",
    "RelationConfigurator",
    "Field",
    "FieldType",
    "Schema",
    "schema_of",
    "HasOne",
    "HasMany",
    "BelongsTo",
    "BelongsToMany",
    # Mapping
    "EntityBinder",
    # Repository
    "Repository",
    "AsyncRepository",
    # Enums
    "DatabaseBackend",
    "JoinType",
    # Exceptions
    "RowORMError",
    "ConfigurationError",
    "MissingTableNameError",
    "PrimaryKeyError",
    "DuplicateTableError",
    "DialectNotFoundError",
    "ConnectionNotFoundError",
    "EntityNotRegisteredError",
    "RelationConfigError",
    "MissingIntermediateTableError",
    "QueryBuildError",
    "BatchInsertError",
    "ExecutionError",
    "MappingError",
    "NotFoundError",
    "FieldConversionError",
    "AdapterError",
    "ConnectionError",
]
