"""Connection and schema registry.

Populated once during engine initialization, then read-only. Registration
is serialized with a lock so initialization can run from any thread.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from row_orm.core.exceptions import (
    ConfigurationError,
    ConnectionNotFoundError,
    DuplicateTableError,
    EntityNotRegisteredError,
)
from row_orm.schema.configurator import configure
from row_orm.schema.schema import Schema, schema_of

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Holds named connections and the schema of every registered entity."""

    def __init__(self) -> None:
        self._connections: dict[str, Any] = {}
        self._schemas: dict[type, Schema] = {}
        self._lock = threading.Lock()

    def add_connection(self, connection: Any) -> None:
        """Register a Connection or AsyncConnection under its name.

        Raises:
            ConfigurationError: If the name is already taken.
        """
        with self._lock:
            if connection.name in self._connections:
                raise ConfigurationError(f"Connection '{connection.name}' is already registered")
            self._connections[connection.name] = connection
        logger.debug(f"Registered connection '{connection.name}' ({connection.dialect.name})")

    def get_connection(self, name: str | None = None) -> Any:
        """Look up a connection by name.

        Without a name the sole registered connection is returned, or the one
        named ``default``.

        Raises:
            ConnectionNotFoundError: If no connection matches.
        """
        if name is None:
            if len(self._connections) == 1:
                return next(iter(self._connections.values()))
            name = "default"
        try:
            return self._connections[name]
        except KeyError:
            raise ConnectionNotFoundError(name) from None

    def connections(self) -> list[Any]:
        return list(self._connections.values())

    def schema_of(self, entity: type, connection: str | None = None) -> Schema:
        """Reflect and register ``entity``, or return its cached schema.

        Args:
            entity: Entity class.
            connection: Connection to register on. Falls back to the
                connection the entity declares, then to the default one.

        Raises:
            ConfigurationError: If the entity is bound to another connection.
            DuplicateTableError: If its table is already mapped on the connection.
        """
        with self._lock:
            cached = self._schemas.get(entity)
            if cached is not None:
                if connection is not None and cached.connection != connection:
                    raise ConfigurationError(
                        f"{entity.__name__} is already registered on connection '{cached.connection}'"
                    )
                return cached

            declared = configure(entity).connection_name
            if connection and declared and connection != declared:
                raise ConfigurationError(
                    f"{entity.__name__} declares connection '{declared}' but was listed on '{connection}'"
                )
            conn = self.get_connection(connection or declared)
            schema = schema_of(entity, conn.dialect, conn.name)
            if schema.table in conn.schemas:
                raise DuplicateTableError(schema.table, conn.name)

            conn.schemas[schema.table] = schema
            self._schemas[entity] = schema

        logger.debug(f"Registered {entity.__name__} as '{schema.table}' on '{conn.name}'")
        return schema

    def schema_for(self, entity: type) -> Schema:
        """Cached schema of a registered entity.

        Raises:
            EntityNotRegisteredError: If the entity was never registered.
        """
        try:
            return self._schemas[entity]
        except KeyError:
            raise EntityNotRegisteredError(entity.__name__) from None

    def connection_for(self, schema: Schema) -> Any:
        return self.get_connection(schema.connection)
