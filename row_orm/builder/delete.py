"""DELETE statement builder."""

from __future__ import annotations

from typing import Any

from row_orm.builder.clauses import WhereMixin
from row_orm.core.exceptions import QueryBuildError


class Delete(WhereMixin):
    """Builds ``DELETE FROM t [WHERE ...]``."""

    def __init__(self) -> None:
        super().__init__()
        self._table = ""

    def table(self, name: str) -> Delete:
        self._table = name
        return self

    def from_(self, name: str) -> Delete:
        return self.table(name)

    def build(self) -> tuple[str, list[Any]]:
        if not self._table:
            raise QueryBuildError("Table name cannot be empty")
        sections = [f"DELETE FROM {self._table}"]
        where = self._where_sql()
        if where:
            sections.append(where)
        return " ".join(sections), list(self._args)

    def sql(self) -> str:
        return self.build()[0]
