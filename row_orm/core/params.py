"""Placeholder normalization.

Statements are rendered with dialect placeholders (``?`` or ``$N``). Drivers
that expect another paramstyle get the statement rewritten here. String
literals are left untouched.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from functools import lru_cache
from typing import Any

from row_orm.core.dialect import Dialect
from row_orm.core.exceptions import QueryBuildError

# Matches single-quoted string literals (with escaped quotes handled)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\.)*'")

_NUMBERED_PATTERN = re.compile(r"\$(\d+)")
_QMARK_PATTERN = re.compile(r"\?")

_PARAMSTYLE_MARKERS = {
    "qmark": "?",
    "format": "%s",
}


def normalize_placeholders(sql: str, dialect: Dialect, paramstyle: str) -> str:
    """Convert dialect placeholders to the driver's paramstyle.

    Args:
        sql: Statement rendered with ``dialect`` placeholders.
        dialect: Dialect the statement was rendered for.
        paramstyle: Driver paramstyle, ``'qmark'`` (``?``) or ``'format'`` (``%s``).

    Returns:
        SQL in the driver's paramstyle. Numbered placeholders become
        positional markers in text order; use :func:`bind_placeholders` to
        reorder the arguments to match.
    """
    if paramstyle not in _PARAMSTYLE_MARKERS:
        raise ValueError(f"Unsupported paramstyle: {paramstyle}")
    if paramstyle == "qmark" and not dialect.include_index_in_placeholder:
        return sql
    return _convert(sql, dialect.include_index_in_placeholder, paramstyle)[0]


def bind_placeholders(
    sql: str,
    args: Sequence[Any] | None,
    dialect: Dialect,
    paramstyle: str,
    text_order: bool = False,
) -> tuple[str, tuple[Any, ...]]:
    """Rewrite ``sql`` for the driver and line ``args`` up with its markers.

    ``$N`` takes ``args[N-1]`` and may be repeated or appear out of order.
    With ``text_order`` the arguments are already in the order the
    placeholders appear in the text and are passed through unchanged.

    Args:
        sql: Statement rendered with ``dialect`` placeholders.
        args: Positional arguments.
        dialect: Dialect the statement was rendered for.
        paramstyle: Driver paramstyle.
        text_order: Bind numbered placeholders by position in the text.

    Returns:
        ``(statement, values)`` ready for the adapter.

    Raises:
        QueryBuildError: If a numbered placeholder has no matching argument.
    """
    statement = normalize_placeholders(sql, dialect, paramstyle)
    values = coerce_args(args)
    if text_order or not dialect.include_index_in_placeholder:
        return statement, values

    numbers = _convert(sql, True, paramstyle)[1]
    if not numbers:
        return statement, values
    for number in numbers:
        if not 1 <= number <= len(values):
            raise QueryBuildError(
                f"Placeholder ${number} has no argument ({len(values)} given): {sql}"
            )
    return statement, tuple(values[number - 1] for number in numbers)


@lru_cache(maxsize=256)
def _convert(sql: str, numbered: bool, paramstyle: str) -> tuple[str, tuple[int, ...]]:
    pattern = _NUMBERED_PATTERN if numbered else _QMARK_PATTERN
    marker = _PARAMSTYLE_MARKERS[paramstyle]
    escape_percent = paramstyle == "format"
    numbers: list[int] = []

    def _marker(match: re.Match[str]) -> str:
        if numbered:
            numbers.append(int(match.group(1)))
        return marker

    parts: list[str] = []
    last_end = 0

    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append(_replace(sql[last_end:start], pattern, _marker, escape_percent))
        literal = match.group()
        parts.append(literal.replace("%", "%%") if escape_percent else literal)
        last_end = end

    if last_end < len(sql):
        parts.append(_replace(sql[last_end:], pattern, _marker, escape_percent))

    return "".join(parts), tuple(numbers)


def _replace(
    segment: str,
    pattern: re.Pattern[str],
    repl: Callable[[re.Match[str]], str],
    escape_percent: bool,
) -> str:
    if escape_percent:
        segment = segment.replace("%", "%%")
    return pattern.sub(repl, segment)


def coerce_args(args: Sequence[Any] | None) -> tuple[Any, ...]:
    """Normalize an argument list to a tuple for DB-API ``execute``."""
    if args is None:
        return ()
    return tuple(args)
