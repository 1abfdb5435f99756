"""ORM engines.

The Engine owns a ConnectionRegistry, renders statements from registered
schemas, executes them on the entity's connection and binds the results.
AsyncEngine is the same surface over AsyncConnection; callers impose
timeouts and cancellation with asyncio.
"""

from __future__ import annotations

import logging
from contextlib import closing
from typing import Any, TypeVar

from rich.console import Console

from row_orm.core.connection import AsyncConnection, Connection, ConnectionConfig, ExecResult
from row_orm.core.exceptions import BatchInsertError
from row_orm.core.registry import ConnectionRegistry
from row_orm.core.statements import (
    delete_statement,
    find_statement,
    insert_all_statement,
    insert_statement,
    update_statement,
)
from row_orm.mapping.binder import EntityBinder, convert_value
from row_orm.mapping.relations import (
    RelationQuery,
    belongs_to_many_query,
    belongs_to_query,
    has_many_query,
    has_one_query,
)
from row_orm.schema.report import render_schematic
from row_orm.schema.schema import Schema

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _entity_type(entity: Any) -> type:
    return entity if isinstance(entity, type) else type(entity)


class _BaseEngine:
    """State and schema lookups shared by both engines."""

    def __init__(self, registry: ConnectionRegistry | None = None) -> None:
        self._registry = registry or ConnectionRegistry()

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry

    def get_connection(self, name: str | None = None) -> Any:
        return self._registry.get_connection(name)

    def register(self, entity: type, connection: str | None = None) -> Schema:
        """Register an entity after initialization."""
        return self._registry.schema_of(entity, connection)

    def schema_for(self, entity: Any) -> Schema:
        """Schema of an entity class or instance."""
        return self._registry.schema_for(_entity_type(entity))

    def _register_entities(self, config: ConnectionConfig) -> None:
        for entity in config.entities:
            self._registry.schema_of(entity, config.name)

    def _batch_schema(self, objs: tuple[Any, ...]) -> Schema:
        schema = self.schema_for(objs[0])
        for obj in objs[1:]:
            other = self.schema_for(obj)
            if other.table != schema.table:
                raise BatchInsertError(other.table, schema.table)
        return schema

    def _has_one(self, owner: Any, prop: type) -> tuple[Schema, RelationQuery]:
        target = self.schema_for(prop)
        return target, has_one_query(self.schema_for(owner), owner, target)

    def _has_many(self, owner: Any, prop: type) -> tuple[Schema, RelationQuery]:
        target = self.schema_for(prop)
        return target, has_many_query(self.schema_for(owner), owner, target)

    def _belongs_to(self, prop: Any, owner: type) -> tuple[Schema, RelationQuery]:
        target = self.schema_for(owner)
        return target, belongs_to_query(self.schema_for(prop), prop, target)

    def _belongs_to_many(self, prop: Any, owner: type) -> tuple[Schema, RelationQuery]:
        target = self.schema_for(owner)
        return target, belongs_to_many_query(self.schema_for(prop), prop, target)

    def _set_generated_pk(self, schema: Schema, obj: Any, result: ExecResult) -> None:
        if schema.has_zero_pk(obj) and result.last_insert_id is not None:
            schema.set_pk_value(obj, convert_value(schema.primary_key, result.last_insert_id))

    def schematic(self, console: Console | None = None) -> None:
        """Print every connection's dialect, tables and relations."""
        render_schematic(self._registry.connections(), console)


class Engine(_BaseEngine):
    """Synchronous ORM engine.

    Example::

        engine = Engine.from_config(
            ConnectionConfig(driver="sqlite", database="app.db", entities=[User, Post])
        )
        user = User(name="ada")
        engine.insert(user)
        posts = engine.has_many(user, Post)
    """

    @classmethod
    def from_config(cls, *configs: ConnectionConfig) -> Engine:
        """Create an Engine and initialize it with ``configs``."""
        return cls().initialize(*configs)

    def initialize(self, *configs: ConnectionConfig) -> Engine:
        """Open (or adopt) every connection and register its entities."""
        for config in configs:
            self._registry.add_connection(Connection.open(config))
            self._register_entities(config)
        logger.info(f"Initialized {len(configs)} connection(s)")
        return self

    def _exec(
        self, schema: Schema, sql: str, args: list[Any], text_order: bool = False
    ) -> ExecResult:
        return self._registry.connection_for(schema).exec(sql, args, text_order)

    def _fetch(self, schema: Schema, sql: str, args: list[Any], many: bool) -> Any:
        with closing(self._registry.connection_for(schema).query(sql, args)) as cursor:
            return EntityBinder(schema).bind(cursor, many=many)

    # --- Writes ---

    def insert(self, obj: Any) -> None:
        """Insert ``obj`` and write the generated key back into it."""
        schema = self.schema_for(obj)
        result = self._exec(schema, *insert_statement(schema, obj))
        self._set_generated_pk(schema, obj, result)

    def insert_all(self, *objs: Any) -> int:
        """Insert many entities of one table with a single statement.

        Generated keys are not written back for batches.

        Raises:
            BatchInsertError: If the entities map to different tables.
        """
        if not objs:
            return 0
        if len(objs) == 1:
            self.insert(objs[0])
            return 1
        schema = self._batch_schema(objs)
        return self._exec(schema, *insert_all_statement(schema, objs)).rows_affected

    def save(self, obj: Any) -> None:
        """Insert when the primary key is zero, otherwise update."""
        if self.schema_for(obj).has_zero_pk(obj):
            self.insert(obj)
        else:
            self.update(obj)

    def update(self, obj: Any) -> int:
        """Update every persisted non-key column by primary key."""
        schema = self.schema_for(obj)
        sql, args = update_statement(schema, obj)
        return self._exec(schema, sql, args, text_order=True).rows_affected

    def delete(self, obj: Any) -> int:
        schema = self.schema_for(obj)
        return self._exec(schema, *delete_statement(schema, obj)).rows_affected

    # --- Reads ---

    def find(self, entity: type[T], pk: Any) -> T:
        """Fetch one entity by primary key.

        Raises:
            NotFoundError: If no row has that key.
        """
        schema = self.schema_for(entity)
        sql, args = find_statement(schema, pk)
        return self._fetch(schema, sql, args, many=False)  # type: ignore[no-any-return]

    def query(self, entity: type[T], stmt: Any) -> list[T]:
        """Run a built statement and bind every row to ``entity``."""
        schema = self.schema_for(entity)
        sql, args = stmt.build()
        return self._fetch(schema, sql, args, many=True)  # type: ignore[no-any-return]

    def query_raw(self, entity: type[T], sql: str, *args: Any) -> list[T]:
        schema = self.schema_for(entity)
        return self._fetch(schema, sql, list(args), many=True)  # type: ignore[no-any-return]

    def exec(self, entity: type, stmt: Any) -> ExecResult:
        """Run a built write statement on ``entity``'s connection."""
        sql, args = stmt.build()
        return self._exec(self.schema_for(entity), sql, args)

    def exec_raw(self, entity: type, sql: str, *args: Any) -> ExecResult:
        return self._exec(self.schema_for(entity), sql, list(args))

    # --- Relations ---

    def has_one(self, owner: Any, prop: type[T]) -> T:
        target, q = self._has_one(owner, prop)
        return self._fetch(target, q.sql, q.args, q.many)  # type: ignore[no-any-return]

    def has_many(self, owner: Any, prop: type[T]) -> list[T]:
        target, q = self._has_many(owner, prop)
        return self._fetch(target, q.sql, q.args, q.many)  # type: ignore[no-any-return]

    def belongs_to(self, prop: Any, owner: type[T]) -> T:
        target, q = self._belongs_to(prop, owner)
        return self._fetch(target, q.sql, q.args, q.many)  # type: ignore[no-any-return]

    def belongs_to_many(self, prop: Any, owner: type[T]) -> list[T]:
        target, q = self._belongs_to_many(prop, owner)
        return self._fetch(target, q.sql, q.args, q.many)  # type: ignore[no-any-return]

    def close(self) -> None:
        """Close every connection."""
        for connection in self._registry.connections():
            connection.close()


class AsyncEngine(_BaseEngine):
    """Asynchronous ORM engine."""

    @classmethod
    async def from_config(cls, *configs: ConnectionConfig) -> AsyncEngine:
        """Create an AsyncEngine and initialize it with ``configs``."""
        return await cls().initialize(*configs)

    async def initialize(self, *configs: ConnectionConfig) -> AsyncEngine:
        """Open (or adopt) every connection and register its entities."""
        for config in configs:
            self._registry.add_connection(await AsyncConnection.open(config))
            self._register_entities(config)
        logger.info(f"Initialized {len(configs)} async connection(s)")
        return self

    async def _exec(
        self, schema: Schema, sql: str, args: list[Any], text_order: bool = False
    ) -> ExecResult:
        return await self._registry.connection_for(schema).exec(sql, args, text_order)

    async def _fetch(self, schema: Schema, sql: str, args: list[Any], many: bool) -> Any:
        rows = await self._registry.connection_for(schema).query(sql, args)
        return EntityBinder(schema).bind_rows(rows, many=many)

    # --- Writes ---

    async def insert(self, obj: Any) -> None:
        """Insert ``obj`` and write the generated key back into it."""
        schema = self.schema_for(obj)
        result = await self._exec(schema, *insert_statement(schema, obj))
        self._set_generated_pk(schema, obj, result)

    async def insert_all(self, *objs: Any) -> int:
        """Insert many entities of one table with a single statement."""
        if not objs:
            return 0
        if len(objs) == 1:
            await self.insert(objs[0])
            return 1
        schema = self._batch_schema(objs)
        return (await self._exec(schema, *insert_all_statement(schema, objs))).rows_affected

    async def save(self, obj: Any) -> None:
        if self.schema_for(obj).has_zero_pk(obj):
            await self.insert(obj)
        else:
            await self.update(obj)

    async def update(self, obj: Any) -> int:
        schema = self.schema_for(obj)
        sql, args = update_statement(schema, obj)
        return (await self._exec(schema, sql, args, text_order=True)).rows_affected

    async def delete(self, obj: Any) -> int:
        schema = self.schema_for(obj)
        return (await self._exec(schema, *delete_statement(schema, obj))).rows_affected

    # --- Reads ---

    async def find(self, entity: type[T], pk: Any) -> T:
        schema = self.schema_for(entity)
        sql, args = find_statement(schema, pk)
        return await self._fetch(schema, sql, args, many=False)  # type: ignore[no-any-return]

    async def query(self, entity: type[T], stmt: Any) -> list[T]:
        schema = self.schema_for(entity)
        sql, args = stmt.build()
        return await self._fetch(schema, sql, args, many=True)  # type: ignore[no-any-return]

    async def query_raw(self, entity: type[T], sql: str, *args: Any) -> list[T]:
        schema = self.schema_for(entity)
        return await self._fetch(schema, sql, list(args), many=True)  # type: ignore[no-any-return]

    async def exec(self, entity: type, stmt: Any) -> ExecResult:
        sql, args = stmt.build()
        return await self._exec(self.schema_for(entity), sql, args)

    async def exec_raw(self, entity: type, sql: str, *args: Any) -> ExecResult:
        return await self._exec(self.schema_for(entity), sql, list(args))

    # --- Relations ---

    async def has_one(self, owner: Any, prop: type[T]) -> T:
        target, q = self._has_one(owner, prop)
        return await self._fetch(target, q.sql, q.args, q.many)  # type: ignore[no-any-return]

    async def has_many(self, owner: Any, prop: type[T]) -> list[T]:
        target, q = self._has_many(owner, prop)
        return await self._fetch(target, q.sql, q.args, q.many)  # type: ignore[no-any-return]

    async def belongs_to(self, prop: Any, owner: type[T]) -> T:
        target, q = self._belongs_to(prop, owner)
        return await self._fetch(target, q.sql, q.args, q.many)  # type: ignore[no-any-return]

    async def belongs_to_many(self, prop: Any, owner: type[T]) -> list[T]:
        target, q = self._belongs_to_many(prop, owner)
        return await self._fetch(target, q.sql, q.args, q.many)  # type: ignore[no-any-return]

    async def close(self) -> None:
        """Close every connection."""
        for connection in self._registry.connections():
            await connection.close()
