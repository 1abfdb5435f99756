"""Condition helpers for WHERE clauses.

Each helper renders a plain string; values are placeholders or literals
supplied by the caller, never bound arguments.
"""

from __future__ import annotations


def equal(column: str, value: str) -> str:
    return f"{column} = {value}"


def not_equal(column: str, value: str) -> str:
    return f"{column} != {value}"


def greater(column: str, value: str) -> str:
    return f"{column} > {value}"


def greater_equal(column: str, value: str) -> str:
    return f"{column} >= {value}"


def less(column: str, value: str) -> str:
    return f"{column} < {value}"


def less_equal(column: str, value: str) -> str:
    return f"{column} <= {value}"


def like(column: str, pattern: str) -> str:
    return f"{column} LIKE {pattern}"


def in_(column: str, *values: str) -> str:
    """``column IN (v1, v2, ...)``."""
    return f"{column} IN ({', '.join(values)})"


def between(column: str, lower: str, higher: str) -> str:
    return f"{column} BETWEEN {lower} AND {higher}"


def not_(*condition: str) -> str:
    return "NOT " + " ".join(condition)


def is_null(column: str) -> str:
    return f"{column} IS NULL"


def is_not_null(column: str) -> str:
    return f"{column} IS NOT NULL"


def group(*condition: str) -> str:
    """Wrap a condition in parentheses."""
    return "(" + " ".join(condition) + ")"
