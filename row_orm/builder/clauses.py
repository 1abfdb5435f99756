"""Clause fragments shared by the statement builders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from row_orm.core.enums import JoinType

_CONNECTORS = ("AND ", "OR ")


def _condition(parts: tuple[str, ...]) -> str:
    return " ".join(part.strip() for part in parts if part.strip())


class WhereMixin:
    """WHERE composition for Select, Update and Delete.

    Fragments are rendered in call order, space-joined. Connectors are taken
    verbatim from the method used, so operator precedence is the caller's
    business; use ``helpers.group`` for parentheses.
    """

    def __init__(self) -> None:
        self._conditions: list[str] = []
        self._args: list[Any] = []

    def where(self, *parts: str) -> Any:
        """Add a condition. A second call is joined with ``AND``.

        Empty conditions are ignored, so optional filters can be passed
        through unconditionally.
        """
        condition = _condition(parts)
        if condition:
            self._conditions.append(f"AND {condition}" if self._conditions else condition)
        return self

    def and_(self, *parts: str) -> Any:
        return self._prefixed("AND", parts)

    def or_(self, *parts: str) -> Any:
        return self._prefixed("OR", parts)

    def not_(self, *parts: str) -> Any:
        return self._prefixed("NOT", parts)

    def _prefixed(self, keyword: str, parts: tuple[str, ...]) -> Any:
        condition = _condition(parts)
        if condition:
            self._conditions.append(f"{keyword} {condition}")
        return self

    def with_args(self, *args: Any) -> Any:
        """Append positional arguments in placeholder order."""
        self._args.extend(args)
        return self

    def _where_sql(self) -> str | None:
        if not self._conditions:
            return None
        first, *rest = self._conditions
        for connector in _CONNECTORS:
            if first.startswith(connector):
                first = first[len(connector) :]
                break
        return "WHERE " + " ".join([first, *rest])


@dataclass(frozen=True)
class JoinClause:
    """``<TYPE> JOIN <table> ON <condition>``."""

    join_type: JoinType
    table: str
    condition: str

    def __str__(self) -> str:
        return f"{self.join_type.value} JOIN {self.table} ON {self.condition}"
