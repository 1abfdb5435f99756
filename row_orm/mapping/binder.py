"""Row-to-entity binder.

Rows are matched to fields by exact SQL column name. Every instance starts
from the zero values precomputed on its Schema, so columns missing from a
result set leave their fields at zero and extra columns are ignored.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable, Mapping, Sequence
from decimal import Decimal
from typing import Any

from row_orm.core.exceptions import FieldConversionError, NotFoundError
from row_orm.schema.field import Field, FieldType
from row_orm.schema.schema import Schema


def rows_to_dicts(columns: Sequence[str], rows: Sequence[Any]) -> list[dict[str, Any]]:
    """Convert fetched rows to dicts keyed by column name.

    Handles both tuple-like rows and dict-like rows from different adapters.
    """
    if not rows:
        return []
    if isinstance(rows[0], Mapping):
        return [dict(row) for row in rows]
    return [dict(zip(columns, row, strict=True)) for row in rows]


def rows_from_cursor(cursor: Any, many: bool = True) -> list[dict[str, Any]]:
    """Fetch every row from a DB-API cursor as dicts.

    The cursor is always drained so unbuffered drivers are left ready for
    the next statement. With ``many=False`` only the first row is kept.
    """
    if cursor.description is None:
        return []
    columns = [desc[0] for desc in cursor.description]
    rows = cursor.fetchall()
    return rows_to_dicts(columns, rows if many else rows[:1])


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "t", "yes", "y")
    return bool(value)


def _to_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode()
    return str(value)


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode()
    return bytes(value)


def _to_datetime(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    return datetime.datetime.fromisoformat(_to_text(value))


def _to_date(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(_to_text(value)[:10])


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


_CONVERTERS: dict[FieldType, Callable[[Any], Any]] = {
    FieldType.INTEGER: int,
    FieldType.FLOAT: float,
    FieldType.TEXT: _to_text,
    FieldType.BOOLEAN: _to_bool,
    FieldType.BYTES: _to_bytes,
    FieldType.DATETIME: _to_datetime,
    FieldType.DATE: _to_date,
    FieldType.DECIMAL: _to_decimal,
}


def convert_value(field: Field, value: Any) -> Any:
    """Convert a raw column value to the field's Python type.

    ``None`` is passed through unchanged.

    Raises:
        ValueError, TypeError: If the value is not convertible.
    """
    if value is None:
        return None
    if field.type is FieldType.ENUM:
        return field.python_type(value)
    converter = _CONVERTERS.get(field.type)
    if converter is None:
        return value
    return converter(value)


class EntityBinder:
    """Binds result rows into instances of one schema's entity.

    Args:
        schema: Schema of the destination entity.
    """

    def __init__(self, schema: Schema) -> None:
        self._schema = schema

    @property
    def schema(self) -> Schema:
        return self._schema

    def map_one(self, row: Mapping[str, Any]) -> Any:
        """Bind a single row dict to a fresh entity instance."""
        schema = self._schema
        obj = schema.new_instance()
        for column, value in row.items():
            field = schema.field_for_column(column)
            if field is None:
                continue
            try:
                converted = convert_value(field, value)
            except (ValueError, TypeError, ArithmeticError) as e:
                raise FieldConversionError(schema.entity.__name__, field.name, value, str(e)) from e
            schema.set_value(obj, field, converted)
        return obj

    def map_many(self, rows: Sequence[Mapping[str, Any]]) -> list[Any]:
        """Map all rows via map_one."""
        return [self.map_one(row) for row in rows]

    def bind_rows(self, rows: Sequence[Mapping[str, Any]], many: bool = False) -> Any:
        """Bind already-fetched rows.

        Args:
            rows: Row dicts.
            many: Return a list instead of a single entity.

        Raises:
            NotFoundError: If ``many`` is False and there are no rows.
        """
        if many:
            return self.map_many(rows)
        if not rows:
            raise NotFoundError(self._schema.table)
        return self.map_one(rows[0])

    def bind(self, cursor: Any, many: bool = False) -> Any:
        """Fetch from an open cursor and bind the rows."""
        return self.bind_rows(rows_from_cursor(cursor, many=many), many=many)


def bind(schema: Schema, cursor: Any, many: bool = False) -> Any:
    """Shortcut for ``EntityBinder(schema).bind(cursor, many)``."""
    return EntityBinder(schema).bind(cursor, many=many)
