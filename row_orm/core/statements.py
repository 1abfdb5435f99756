"""Statements issued by the ORM operations.

Pure functions: each takes a Schema (and an entity or key) and returns the
rendered ``(sql, args)`` pair in the schema's dialect.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from row_orm.builder.delete import Delete
from row_orm.builder.insert import Insert
from row_orm.builder.select import Select
from row_orm.builder.update import Update
from row_orm.core.dialect import SQLITE3, Dialect
from row_orm.schema.schema import Schema


def _dialect(schema: Schema) -> Dialect:
    return schema.dialect or SQLITE3


def _pk_condition(schema: Schema) -> str:
    return f"{schema.primary_key_column} = {_dialect(schema).placeholder(1)}"


def insert_statement(schema: Schema, obj: Any) -> tuple[str, list[Any]]:
    """INSERT for one entity.

    The primary key column is included only when ``obj`` already carries a
    non-zero key. Dialects that support it get ``RETURNING <pk>``.
    """
    include_pk = not schema.has_zero_pk(obj)
    stmt = (
        Insert(_dialect(schema))
        .table(schema.table)
        .into(*schema.columns(include_pk))
        .row(*schema.values_of(obj, include_pk))
    )
    if _dialect(schema).supports_returning:
        stmt.returning(schema.primary_key_column)
    return stmt.build()


def insert_all_statement(schema: Schema, objs: Sequence[Any]) -> tuple[str, list[Any]]:
    """Multi-row INSERT. Placeholder numbering continues across rows.

    Raises:
        QueryBuildError: If the arguments do not match the rendered placeholders.
    """
    columns = schema.columns(False)
    stmt = Insert(_dialect(schema)).table(schema.table).into(*columns)
    for obj in objs:
        stmt.row(*schema.values_of(obj, False))
    return stmt.build()


def find_statement(schema: Schema, pk: Any) -> tuple[str, list[Any]]:
    """SELECT of every persisted column by primary key."""
    return (
        Select()
        .select(*schema.columns(True))
        .from_(schema.table)
        .where(_pk_condition(schema))
        .with_args(pk)
        .build()
    )


def update_statement(schema: Schema, obj: Any) -> tuple[str, list[Any]]:
    """UPDATE of every persisted non-key column by primary key.

    The key placeholder is numbered 1 and the SET placeholders 2..N+1, while
    the arguments are ordered ``[set values..., pk]``. Numbered placeholders
    bind in text order, which matches that argument order.
    """
    dialect = _dialect(schema)
    stmt = Update().table(schema.table).where(_pk_condition(schema))
    pairs = zip(schema.columns(False), schema.values_of(obj, False))
    for position, (column, value) in enumerate(pairs, start=2):
        stmt.set(column, dialect.placeholder(position)).with_args(value)
    stmt.with_args(schema.pk_value(obj))
    return stmt.build()


def delete_statement(schema: Schema, obj: Any) -> tuple[str, list[Any]]:
    """DELETE by primary key."""
    return (
        Delete()
        .table(schema.table)
        .where(_pk_condition(schema))
        .with_args(schema.pk_value(obj))
        .build()
    )
