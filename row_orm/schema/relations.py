"""Relation configuration variants.

Blank fields are filled in at resolution time from naming conventions, see
row_orm.mapping.relations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class HasOne:
    """Owner has exactly one property row pointing back at it."""

    cardinality: ClassVar[str] = "1-1"

    property_table: str = ""
    property_foreign_key: str = ""


@dataclass(frozen=True)
class HasMany:
    """Owner has many property rows pointing back at it."""

    cardinality: ClassVar[str] = "1-N"

    property_table: str = ""
    property_foreign_key: str = ""


@dataclass(frozen=True)
class BelongsTo:
    """Property row holds a foreign key to its owner."""

    cardinality: ClassVar[str] = "N-1"

    owner_table: str = ""
    local_foreign_key: str = ""
    foreign_column_name: str = ""


@dataclass(frozen=True)
class BelongsToMany:
    """Many-to-many through an intermediate table.

    ``intermediate_table`` has no default.
    """

    cardinality: ClassVar[str] = "N-N"

    intermediate_table: str = ""
    intermediate_property_id: str = ""
    intermediate_owner_id: str = ""
    foreign_table: str = ""
    foreign_lookup_column: str = ""


RelationConfig = Union[HasOne, HasMany, BelongsTo, BelongsToMany]
