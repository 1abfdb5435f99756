"""SELECT statement builder."""

from __future__ import annotations

from typing import Any

from row_orm.builder.clauses import JoinClause, WhereMixin
from row_orm.core.enums import JoinType
from row_orm.core.exceptions import QueryBuildError


class Select(WhereMixin):
    """Builds ``SELECT`` statements.

    Clauses render in standard SQL order regardless of call order::

        SELECT [DISTINCT] cols FROM t [joins] [WHERE] [GROUP BY]
        [ORDER BY [DESC]] [LIMIT] [OFFSET]

    Example::

        sql, args = (
            Select()
            .select("id", "title")
            .from_("posts")
            .where("user_id = ?")
            .with_args(7)
            .order_by("id", desc=True)
            .build()
        )
    """

    def __init__(self) -> None:
        super().__init__()
        self._table = ""
        self._columns: list[str] = []
        self._distinct = False
        self._joins: list[JoinClause] = []
        self._order_by: list[str] = []
        self._desc = False
        self._group_by: list[str] = []
        self._limit: int | None = None
        self._offset: int | None = None

    def table(self, name: str) -> Select:
        self._table = name
        return self

    def from_(self, name: str) -> Select:
        """Alias of :meth:`table`."""
        return self.table(name)

    def select(self, *columns: str, distinct: bool = False) -> Select:
        """Set the projection. No columns means ``*``."""
        self._columns = list(columns)
        self._distinct = distinct
        return self

    def order_by(self, *columns: str, desc: bool = False) -> Select:
        self._order_by = list(columns)
        self._desc = desc
        return self

    def group_by(self, *columns: str) -> Select:
        self._group_by = list(columns)
        return self

    def _join(self, join_type: JoinType, table: str, condition: str) -> Select:
        self._joins.append(JoinClause(join_type, table, condition))
        return self

    def inner_join(self, table: str, on: str) -> Select:
        return self._join(JoinType.INNER, table, on)

    def left_join(self, table: str, on: str) -> Select:
        return self._join(JoinType.LEFT, table, on)

    def right_join(self, table: str, on: str) -> Select:
        return self._join(JoinType.RIGHT, table, on)

    def full_outer_join(self, table: str, on: str) -> Select:
        return self._join(JoinType.FULL_OUTER, table, on)

    def limit(self, count: int) -> Select:
        self._limit = count
        return self

    def offset(self, count: int) -> Select:
        self._offset = count
        return self

    def build(self) -> tuple[str, list[Any]]:
        """Render the statement.

        Raises:
            QueryBuildError: If no table was set.
        """
        if not self._table:
            raise QueryBuildError("Table name cannot be empty")

        sections = ["SELECT"]
        if self._distinct:
            sections.append("DISTINCT")
        sections.append(", ".join(self._columns) if self._columns else "*")
        sections.append(f"FROM {self._table}")
        sections.extend(str(join) for join in self._joins)

        where = self._where_sql()
        if where:
            sections.append(where)
        if self._group_by:
            sections.append("GROUP BY " + ", ".join(self._group_by))
        if self._order_by:
            sections.append("ORDER BY " + ", ".join(self._order_by))
            if self._desc:
                sections.append("DESC")
        if self._limit is not None:
            sections.append(f"LIMIT {int(self._limit)}")
        if self._offset is not None:
            sections.append(f"OFFSET {int(self._offset)}")

        return " ".join(sections), list(self._args)

    def sql(self) -> str:
        """Render only the SQL text."""
        return self.build()[0]
