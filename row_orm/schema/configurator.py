"""Configuration DSL handed to an entity's configure hooks."""

from __future__ import annotations

from row_orm.core.exceptions import MissingTableNameError
from row_orm.schema.relations import (
    BelongsTo,
    BelongsToMany,
    HasMany,
    HasOne,
    RelationConfig,
)


class EntityConfigurator:
    """Collects table-level settings for one entity."""

    def __init__(self) -> None:
        self._table = ""
        self._connection: str | None = None
        self._primary_key: str | None = None
        self._columns: dict[str, str] = {}
        self._virtual: set[str] = set()

    def table(self, name: str) -> EntityConfigurator:
        """Set the table name. Mandatory."""
        self._table = name
        return self

    def connection(self, name: str) -> EntityConfigurator:
        """Bind the entity to a named connection."""
        self._connection = name
        return self

    def primary_key(self, field_name: str) -> EntityConfigurator:
        """Use ``field_name`` as primary key instead of ``id``."""
        self._primary_key = field_name
        return self

    def column(self, field_name: str, column_name: str) -> EntityConfigurator:
        """Override the SQL column name of a field."""
        self._columns[field_name] = column_name
        return self

    def virtual(self, *field_names: str) -> EntityConfigurator:
        """Mark computed fields that are bound from queries but never persisted."""
        self._virtual.update(field_names)
        return self

    @property
    def table_name(self) -> str:
        return self._table

    @property
    def connection_name(self) -> str | None:
        return self._connection

    @property
    def primary_key_field(self) -> str | None:
        return self._primary_key

    @property
    def column_overrides(self) -> dict[str, str]:
        return dict(self._columns)

    @property
    def virtual_fields(self) -> frozenset[str]:
        return frozenset(self._virtual)


def configure(entity: type) -> EntityConfigurator:
    """Run an entity's ``configure_entity`` hook on a fresh configurator.

    Raises:
        MissingTableNameError: If the hook does not set a table name.
    """
    configurator = EntityConfigurator()
    entity.configure_entity(configurator)  # type: ignore[attr-defined]
    if not configurator.table_name:
        raise MissingTableNameError(entity.__name__)
    return configurator


def table_name_of(entity: type) -> str:
    """Table name declared by ``entity``."""
    return configure(entity).table_name


class RelationConfigurator:
    """Collects relation declarations keyed by the related entity's table."""

    def __init__(self) -> None:
        self._relations: dict[str, RelationConfig] = {}

    def _add(self, entity: type, config: RelationConfig) -> RelationConfigurator:
        self._relations[table_name_of(entity)] = config
        return self

    def has_one(self, entity: type, config: HasOne | None = None) -> RelationConfigurator:
        return self._add(entity, config or HasOne())

    def has_many(self, entity: type, config: HasMany | None = None) -> RelationConfigurator:
        return self._add(entity, config or HasMany())

    def belongs_to(self, entity: type, config: BelongsTo | None = None) -> RelationConfigurator:
        return self._add(entity, config or BelongsTo())

    def belongs_to_many(
        self,
        entity: type,
        config: BelongsToMany | None = None,
    ) -> RelationConfigurator:
        return self._add(entity, config or BelongsToMany())

    @property
    def relations(self) -> dict[str, RelationConfig]:
        return dict(self._relations)
