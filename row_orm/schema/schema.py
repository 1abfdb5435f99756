"""Entity schema reflection.

A Schema is built once per entity class and treated as immutable afterwards.
It carries everything the statement builder and the binder need: table name,
ordered fields, primary key, relations and the owning dialect/connection.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from row_orm.core.dialect import Dialect
from row_orm.core.exceptions import ConfigurationError, PrimaryKeyError
from row_orm.schema.configurator import RelationConfigurator, configure, table_name_of
from row_orm.schema.field import (
    Field,
    _is_pydantic_model,
    build_field,
    is_relation_attribute,
    reflect_attributes,
    zero_factory,
)
from row_orm.schema.relations import RelationConfig

__all__ = ["Schema", "schema_of", "table_name_of"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Schema:
    """Reflected metadata of one entity."""

    entity: type
    table: str
    fields: tuple[Field, ...]
    primary_key: Field
    relations: Mapping[str, RelationConfig]
    dialect: Dialect | None = None
    connection: str | None = None
    zero_values: Mapping[str, Callable[[], Any]] = dataclasses.field(
        default_factory=dict, repr=False, compare=False
    )
    _by_column: dict[str, Field] = dataclasses.field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        self._by_column.update({f.column: f for f in self.fields})

    @property
    def primary_key_column(self) -> str:
        return self.primary_key.column

    def persisted_fields(self, include_pk: bool = True) -> list[Field]:
        """Non-virtual fields in declaration order."""
        return [
            f for f in self.fields if not f.is_virtual and (include_pk or not f.is_pk)
        ]

    def columns(self, include_pk: bool = True) -> list[str]:
        """Persisted column names in declaration order.

        Args:
            include_pk: Whether to include the primary-key column.
        """
        return [f.column for f in self.persisted_fields(include_pk)]

    def field_for_column(self, column: str) -> Field | None:
        return self._by_column.get(column)

    def values_of(self, obj: Any, include_pk: bool = True) -> list[Any]:
        """Persisted values of ``obj``, parallel to ``columns(include_pk)``."""
        return [_to_db_value(getattr(obj, f.name)) for f in self.persisted_fields(include_pk)]

    def pk_value(self, obj: Any) -> Any:
        return getattr(obj, self.primary_key.name)

    def has_zero_pk(self, obj: Any) -> bool:
        value = self.pk_value(obj)
        return value is None or value == 0 or value == ""

    def set_value(self, obj: Any, field: Field, value: Any) -> None:
        # frozen dataclasses and models refuse plain setattr
        object.__setattr__(obj, field.name, value)

    def set_pk_value(self, obj: Any, value: Any) -> None:
        self.set_value(obj, self.primary_key, value)

    def new_instance(self) -> Any:
        """Allocate an entity with every required attribute at its zero value."""
        zeros = {name: factory() for name, factory in self.zero_values.items()}
        if _is_pydantic_model(self.entity):
            return self.entity.model_construct(**zeros)  # type: ignore[attr-defined]
        return self.entity(**zeros)


def _to_db_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def schema_of(
    entity: type,
    dialect: Dialect | None = None,
    connection: str | None = None,
) -> Schema:
    """Reflect ``entity`` into a Schema.

    Collection-typed and nested-entity attributes are skipped. Column names
    are the snake_case attribute names unless overridden; the primary key is
    the ``id`` attribute unless overridden.

    Raises:
        MissingTableNameError: If the entity declares no table.
        PrimaryKeyError: If the primary key does not resolve to one column field.
        ConfigurationError: If an override names an unknown attribute.
    """
    configurator = configure(entity)
    attributes = reflect_attributes(entity)
    known = {attr.name for attr in attributes}

    overrides = configurator.column_overrides
    unknown = (set(overrides) | configurator.virtual_fields) - known
    if unknown:
        raise ConfigurationError(f"Unknown fields configured on {entity.__name__}: {sorted(unknown)}")

    pk_name = configurator.primary_key_field or "id"
    if pk_name in configurator.virtual_fields:
        raise PrimaryKeyError(entity.__name__, f"'{pk_name}' is declared virtual")

    fields: list[Field] = []
    zero_values: dict[str, Callable[[], Any]] = {}
    for attr in attributes:
        if attr.required:
            zero_values[attr.name] = zero_factory(attr.annotation)
        if is_relation_attribute(attr.annotation):
            continue
        fields.append(
            build_field(
                attr,
                column=overrides.get(attr.name),
                is_pk=attr.name == pk_name,
                is_virtual=attr.name in configurator.virtual_fields,
            )
        )

    pk_fields = [f for f in fields if f.is_pk]
    if len(pk_fields) != 1:
        raise PrimaryKeyError(entity.__name__, f"no column field named '{pk_name}'")

    relations = RelationConfigurator()
    configure_relations = getattr(entity, "configure_relations", None)
    if configure_relations is not None:
        configure_relations(relations)

    schema = Schema(
        entity=entity,
        table=configurator.table_name,
        fields=tuple(fields),
        primary_key=pk_fields[0],
        relations=MappingProxyType(relations.relations),
        dialect=dialect,
        connection=connection or configurator.connection_name,
        zero_values=MappingProxyType(zero_values),
    )
    logger.debug(
        f"Reflected {entity.__name__} -> {schema.table} "
        f"({len(schema.fields)} fields, pk={schema.primary_key_column})"
    )
    return schema
