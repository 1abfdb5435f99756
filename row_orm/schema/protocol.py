"""Entity protocol.

Any class the ORM maps must expose these two configuration hooks. They are
invoked once, at registration time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from row_orm.schema.configurator import EntityConfigurator, RelationConfigurator


@runtime_checkable
class Entity(Protocol):
    """Capability implemented by every mapped entity class."""

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        """Declare table name, primary key, column overrides and connection."""
        ...

    @classmethod
    def configure_relations(cls, r: RelationConfigurator) -> None:
        """Declare relations to other entities."""
        ...
