"""Relation query construction.

Each resolver looks up the relation declared between two schemas, fills in
conventional defaults for blank config fields and renders the SELECT that
fetches the related rows. Execution and binding are left to the engines.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from row_orm.builder.select import Select
from row_orm.core.dialect import SQLITE3, Dialect
from row_orm.core.exceptions import MissingIntermediateTableError, RelationConfigError
from row_orm.schema.naming import foreign_key_for
from row_orm.schema.relations import BelongsTo, BelongsToMany, HasMany, HasOne
from row_orm.schema.schema import Schema


@dataclass(frozen=True)
class RelationQuery:
    """A rendered relation lookup.

    Attributes:
        sql: SELECT statement in the target schema's dialect.
        args: Positional arguments.
        many: Whether the result binds to a list.
    """

    sql: str
    args: list[Any]
    many: bool


def _dialect_of(schema: Schema) -> Dialect:
    return schema.dialect or SQLITE3


def _lookup(relation: str, expected: type, source: Schema, target: Schema) -> Any:
    config = source.relations.get(target.table)
    if config is None:
        raise RelationConfigError(relation, source.table, target.table, "no relation declared")
    if not isinstance(config, expected):
        raise RelationConfigError(
            relation,
            source.table,
            target.table,
            f"declared as {type(config).__name__}",
        )
    return config


def _select_by(target: Schema, table: str, column: str, value: Any, many: bool) -> RelationQuery:
    sql, args = (
        Select()
        .select(*target.columns(True))
        .from_(table)
        .where(f"{column} = {_dialect_of(target).placeholder(1)}")
        .with_args(value)
        .build()
    )
    return RelationQuery(sql, args, many)


def _owned(relation: str, config_type: type, owner: Schema, target: Schema) -> Any:
    config = _lookup(relation, config_type, owner, target)
    return replace(
        config,
        property_table=config.property_table or target.table,
        property_foreign_key=config.property_foreign_key or foreign_key_for(owner.table),
    )


def has_one_query(owner: Schema, obj: Any, target: Schema) -> RelationQuery:
    """Query for the single ``target`` row pointing at ``obj``."""
    config = _owned("HasOne", HasOne, owner, target)
    return _select_by(
        target, config.property_table, config.property_foreign_key, owner.pk_value(obj), many=False
    )


def has_many_query(owner: Schema, obj: Any, target: Schema) -> RelationQuery:
    """Query for every ``target`` row pointing at ``obj``."""
    config = _owned("HasMany", HasMany, owner, target)
    return _select_by(
        target, config.property_table, config.property_foreign_key, owner.pk_value(obj), many=True
    )


def belongs_to_query(prop: Schema, obj: Any, owner: Schema) -> RelationQuery:
    """Query for the ``owner`` row that ``obj`` references.

    The foreign key value is read from the field of ``obj`` whose column is
    the configured (or conventional) local foreign key.
    """
    config = _lookup("BelongsTo", BelongsTo, prop, owner)
    owner_table = config.owner_table or owner.table
    local_key = config.local_foreign_key or foreign_key_for(owner.table)
    foreign_column = config.foreign_column_name or owner.primary_key_column

    field = prop.field_for_column(local_key)
    if field is None:
        raise RelationConfigError(
            "BelongsTo", prop.table, owner.table, f"no field mapped to column '{local_key}'"
        )
    return _select_by(owner, owner_table, foreign_column, getattr(obj, field.name), many=False)


def belongs_to_many_query(prop: Schema, obj: Any, owner: Schema) -> RelationQuery:
    """Query for every ``owner`` row linked to ``obj`` through the intermediate table.

    Raises:
        MissingIntermediateTableError: If no intermediate table is configured.
    """
    config = _lookup("BelongsToMany", BelongsToMany, prop, owner)
    if not config.intermediate_table:
        raise MissingIntermediateTableError(prop.table, owner.table)
    lookup_column = config.foreign_lookup_column or owner.primary_key_column
    foreign_table = config.foreign_table or owner.table
    property_id = config.intermediate_property_id or foreign_key_for(prop.table)
    owner_id = config.intermediate_owner_id or foreign_key_for(owner.table)

    subquery = (
        Select()
        .select(owner_id)
        .from_(config.intermediate_table)
        .where(f"{property_id} = {_dialect_of(owner).placeholder(1)}")
        .sql()
    )
    sql, args = (
        Select()
        .select(*owner.columns(True))
        .from_(foreign_table)
        .where(f"{lookup_column} IN ({subquery})")
        .with_args(prop.pk_value(obj))
        .build()
    )
    return RelationQuery(sql, args, many=True)
