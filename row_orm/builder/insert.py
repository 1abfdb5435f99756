"""INSERT statement builder."""

from __future__ import annotations

import re
from typing import Any

from row_orm.core.dialect import SQLITE3, Dialect
from row_orm.core.exceptions import QueryBuildError

_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\.)*'")
_NUMBERED_PATTERN = re.compile(r"\$(\d+)")


class Insert:
    """Builds single- and multi-row ``INSERT`` statements.

    Rows are added either as raw placeholder groups through :meth:`values`
    (arguments supplied separately with :meth:`with_args`) or as values
    through :meth:`row`, which renders the dialect's placeholders and keeps
    numbering continuous across rows.

    Args:
        dialect: Placeholder convention used by :meth:`row`. Defaults to ``?``.
    """

    def __init__(self, dialect: Dialect | None = None) -> None:
        self._dialect = dialect or SQLITE3
        self._table = ""
        self._columns: list[str] = []
        self._rows: list[list[str]] = []
        self._args: list[Any] = []
        self._returning: list[str] = []
        self._bound = 0

    def table(self, name: str) -> Insert:
        self._table = name
        return self

    def into(self, *columns: str) -> Insert:
        self._columns = list(columns)
        return self

    def values(self, *placeholders: str) -> Insert:
        """Add a row group of raw placeholders or literals.

        Rows added later with :meth:`row` continue numbering after the
        highest placeholder seen here.
        """
        self._rows.append(list(placeholders))
        for item in placeholders:
            text = _LITERAL_PATTERN.sub("", item)
            if self._dialect.include_index_in_placeholder:
                numbers = [int(n) for n in _NUMBERED_PATTERN.findall(text)]
                self._bound = max([self._bound, *numbers])
            else:
                self._bound += text.count(self._dialect.placeholder_char)
        return self

    def row(self, *values: Any) -> Insert:
        """Add a row of values, rendering one placeholder per value."""
        self._rows.append(self._dialect.placeholders(len(values), start=self._bound + 1))
        self._args.extend(values)
        self._bound += len(values)
        return self

    def with_args(self, *args: Any) -> Insert:
        self._args.extend(args)
        return self

    def returning(self, *columns: str) -> Insert:
        self._returning = list(columns)
        return self

    def build(self) -> tuple[str, list[Any]]:
        """Render the statement.

        Raises:
            QueryBuildError: If the table, columns or rows are missing, a row
                group's width differs from the column count, or the argument
                count differs from the placeholders rendered.
        """
        if not self._table:
            raise QueryBuildError("Table name cannot be empty")
        if not self._columns:
            raise QueryBuildError(f"No columns given for insert into {self._table}")
        if not self._rows:
            raise QueryBuildError(f"No values given for insert into {self._table}")
        for group in self._rows:
            if len(group) != len(self._columns):
                raise QueryBuildError(
                    f"Insert into {self._table} has {len(self._columns)} columns "
                    f"but a row of {len(group)} values"
                )
        if len(self._args) != self._bound:
            raise QueryBuildError(
                f"Insert into {self._table} has {self._bound} placeholders "
                f"but {len(self._args)} args"
            )

        groups = ", ".join("(" + ", ".join(group) + ")" for group in self._rows)
        sql = f"INSERT INTO {self._table} ({', '.join(self._columns)}) VALUES {groups}"
        if self._returning:
            sql += " RETURNING " + ", ".join(self._returning)
        return sql, list(self._args)

    def sql(self) -> str:
        return self.build()[0]
