"""UPDATE statement builder."""

from __future__ import annotations

from typing import Any

from row_orm.builder.clauses import WhereMixin
from row_orm.core.exceptions import QueryBuildError


class Update(WhereMixin):
    """Builds ``UPDATE t SET col = expr, ... [WHERE ...]``."""

    def __init__(self) -> None:
        super().__init__()
        self._table = ""
        self._sets: list[tuple[str, str]] = []

    def table(self, name: str) -> Update:
        self._table = name
        return self

    def set(self, column: str, expression: str) -> Update:
        """Assign ``expression`` (usually a placeholder) to ``column``."""
        self._sets.append((column, expression))
        return self

    def build(self) -> tuple[str, list[Any]]:
        if not self._table:
            raise QueryBuildError("Table name cannot be empty")
        if not self._sets:
            raise QueryBuildError(f"No columns to set for update of {self._table}")

        assignments = ", ".join(f"{column} = {expr}" for column, expr in self._sets)
        sections = [f"UPDATE {self._table} SET {assignments}"]
        where = self._where_sql()
        if where:
            sections.append(where)
        return " ".join(sections), list(self._args)

    def sql(self) -> str:
        return self.build()[0]
