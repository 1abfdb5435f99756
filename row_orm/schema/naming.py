"""Column and table naming conventions."""

from __future__ import annotations

import re
from functools import lru_cache

import inflect

_FIRST_CAP = re.compile(r"(.)([A-Z][a-z]+)")
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")

_inflector = inflect.engine()


def snake_case(name: str) -> str:
    """Convert a field name such as ``createdAt`` or ``HTTPStatus`` to snake_case."""
    name = _FIRST_CAP.sub(r"\1_\2", name)
    return _ALL_CAP.sub(r"\1_\2", name).lower()


@lru_cache(maxsize=512)
def singular(word: str) -> str:
    """Singular form of a table name, e.g. ``posts`` -> ``post``.

    Words that are already singular are returned unchanged.
    """
    if not word:
        return word
    result = _inflector.singular_noun(word)
    return result if result else word


def foreign_key_for(table: str) -> str:
    """Conventional foreign key column pointing at ``table``."""
    return f"{singular(table)}_id"
