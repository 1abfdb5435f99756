"""RowORM exception hierarchy.

Configuration errors are raised at startup and are never retried. Driver
failures are re-raised as ExecutionError with the driver exception chained
as ``__cause__``.
"""

from __future__ import annotations

from typing import Any


class RowORMError(Exception):
    """Base exception for all RowORM errors."""


# --- Configuration ---


class ConfigurationError(RowORMError):
    """Base for entity, connection and relation misconfiguration."""


class MissingTableNameError(ConfigurationError):
    """Raised when an entity does not declare a table name."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"Table name is mandatory for entities: {entity}")


class PrimaryKeyError(ConfigurationError):
    """Raised when an entity's primary key cannot be resolved to exactly one field."""

    def __init__(self, entity: str, detail: str) -> None:
        self.entity = entity
        super().__init__(f"Invalid primary key for {entity}: {detail}")


class DuplicateTableError(ConfigurationError):
    """Raised when two entities map to the same table on one connection."""

    def __init__(self, table: str, connection: str) -> None:
        self.table = table
        self.connection = connection
        super().__init__(f"Table '{table}' is already registered on connection '{connection}'")


class DialectNotFoundError(ConfigurationError):
    """Raised when no dialect matches a driver name."""

    def __init__(self, driver: str) -> None:
        self.driver = driver
        super().__init__(f"No dialect matched with driver '{driver}'")


class ConnectionNotFoundError(ConfigurationError):
    """Raised when a connection name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Connection not found: '{name}'")


class EntityNotRegisteredError(ConfigurationError):
    """Raised when an entity type has no registered schema."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"Entity {entity} is not registered on any connection")


class RelationConfigError(ConfigurationError):
    """Raised when a relation is missing or configured with the wrong variant."""

    def __init__(self, relation: str, owner_table: str, target_table: str, detail: str) -> None:
        self.relation = relation
        self.owner_table = owner_table
        self.target_table = target_table
        super().__init__(f"Wrong config passed for {relation} ({owner_table} -> {target_table}): {detail}")


class MissingIntermediateTableError(RelationConfigError):
    """Raised when a BelongsToMany relation has no intermediate table."""

    def __init__(self, owner_table: str, target_table: str) -> None:
        super().__init__(
            "BelongsToMany",
            owner_table,
            target_table,
            "intermediate table cannot be inferred and must be configured",
        )


# --- Query building ---


class QueryBuildError(RowORMError):
    """Raised when a statement cannot be rendered to SQL."""


class BatchInsertError(QueryBuildError):
    """Raised when a batch insert mixes entities of different tables."""

    def __init__(self, table_a: str, table_b: str) -> None:
        self.tables = (table_a, table_b)
        super().__init__(f"Cannot batch insert for two different tables: {table_a} and {table_b}")


# --- Execution ---


class ExecutionError(RowORMError):
    """Raised when the database driver rejects a statement."""

    def __init__(self, sql: str, detail: str) -> None:
        self.sql = sql
        super().__init__(f"Execution failed for '{sql}': {detail}")


# --- Mapping ---


class MappingError(RowORMError):
    """Base for row binding errors."""


class NotFoundError(MappingError):
    """Raised when a single-entity fetch returns zero rows."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"No rows found in '{table}'")


class FieldConversionError(MappingError):
    """Raised when a column value cannot be converted to its field type."""

    def __init__(self, entity: str, field_name: str, value: Any, detail: str) -> None:
        self.entity = entity
        self.field_name = field_name
        self.value = value
        super().__init__(f"Cannot convert {value!r} for {entity}.{field_name}: {detail}")


# --- Adapter ---


class AdapterError(RowORMError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""
