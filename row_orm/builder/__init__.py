"""Fluent SQL statement builder.

Builders are single-use: configure with chained calls, then ``build()`` to
get the SQL text and its ordered argument list.
"""

from __future__ import annotations

from row_orm.builder import helpers
from row_orm.builder.delete import Delete
from row_orm.builder.insert import Insert
from row_orm.builder.select import Select
from row_orm.builder.update import Update

__all__ = ["Select", "Insert", "Update", "Delete", "helpers"]
