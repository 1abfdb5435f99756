"""Connection configuration and live connections.

ConnectionConfig is a Pydantic model for type-safe connection config.
Connection and AsyncConnection wrap one database handle together with its
dialect, driver adapter and the schemas registered on it.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Sequence
from contextlib import closing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from row_orm.core.dialect import Dialect, get_dialect
from row_orm.core.exceptions import AdapterError, ConnectionError, ExecutionError  # noqa: A004
from row_orm.core.params import bind_placeholders
from row_orm.mapping.binder import rows_to_dicts

if TYPE_CHECKING:
    from row_orm.schema.schema import Schema

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for one named database connection.

    When both ``handle`` and ``dialect`` are supplied the handle is adopted
    as-is and no connection is opened.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = "default"
    driver: str
    database: str = ""
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    extra: dict[str, Any] = {}
    handle: Any = None
    dialect: Dialect | None = None
    entities: list[type] = []


# Adapter module mapping: backend value -> (module_path, sync_class, async_class)
_ADAPTER_MAP: dict[str, tuple[str, str, str]] = {
    "sqlite": ("row_orm.adapters.sqlite", "SqliteSyncAdapter", "SqliteAsyncAdapter"),
    "postgresql": (
        "row_orm.adapters.postgresql",
        "PostgresqlSyncAdapter",
        "PostgresqlAsyncAdapter",
    ),
    "mysql": ("row_orm.adapters.mysql", "MysqlSyncAdapter", "MysqlAsyncAdapter"),
}


def _load_adapter(dialect: Dialect, kind: str) -> Any:
    """Load a sync or async adapter for a dialect's backend."""
    backend = dialect.backend.value
    if backend not in _ADAPTER_MAP:
        raise AdapterError(f"Unsupported database backend: {backend}")

    module_path, sync_cls_name, async_cls_name = _ADAPTER_MAP[backend]
    cls_name = sync_cls_name if kind == "sync" else async_cls_name

    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load {kind} adapter for '{backend}': {e}") from e


def _resolve_dialect(config: ConnectionConfig) -> Dialect:
    if config.dialect is not None:
        return config.dialect
    return get_dialect(config.driver)


@dataclass(frozen=True)
class ExecResult:
    """Outcome of a write statement."""

    last_insert_id: Any
    rows_affected: int


def _last_insert_id(cursor: Any, returned: Any) -> Any:
    if returned is not None:
        if isinstance(returned, dict):
            return next(iter(returned.values()))
        return returned[0]
    return getattr(cursor, "lastrowid", None)


class Connection:
    """Synchronous named connection.

    Created once at initialization. Only ``schemas`` is populated afterwards,
    during entity registration.
    """

    def __init__(self, name: str, dialect: Dialect, handle: Any, adapter: Any) -> None:
        self.name = name
        self.dialect = dialect
        self.handle = handle
        self.adapter = adapter
        self.schemas: dict[str, Schema] = {}

    @classmethod
    def open(cls, config: ConnectionConfig) -> Connection:
        """Open (or adopt) the database handle described by ``config``."""
        dialect = _resolve_dialect(config)
        adapter = _load_adapter(dialect, "sync")
        if config.handle is not None:
            handle = config.handle
        else:
            try:
                handle = adapter.connect(config)
            except Exception as e:
                raise ConnectionError(f"Cannot open connection '{config.name}': {e}") from e
            logger.debug(f"Opened {dialect.name} connection '{config.name}'")
        return cls(config.name, dialect, handle, adapter)

    def get_schema(self, table: str) -> Schema | None:
        return self.schemas.get(table)

    def _execute(self, sql: str, args: Sequence[Any] | None, text_order: bool = False) -> Any:
        statement, values = bind_placeholders(
            sql, args, self.dialect, self.adapter.paramstyle, text_order
        )
        logger.debug(f"[{self.name}] {statement} with {len(values)} args")
        try:
            return self.adapter.execute(self.handle, statement, values)
        except Exception as e:
            raise ExecutionError(sql, str(e)) from e

    def exec(
        self, sql: str, args: Sequence[Any] | None = None, text_order: bool = False
    ) -> ExecResult:
        """Execute a write statement and commit it.

        Args:
            sql: Statement in the connection's dialect.
            args: Positional arguments.
            text_order: Bind numbered placeholders in text order instead of by number.
        """
        with closing(self._execute(sql, args, text_order)) as cursor:
            try:
                rows = cursor.fetchall() if cursor.description is not None else []
                self.adapter.commit(self.handle)
            except Exception as e:
                raise ExecutionError(sql, str(e)) from e
            returned = rows[0] if rows else None
            return ExecResult(_last_insert_id(cursor, returned), int(cursor.rowcount))

    def query(self, sql: str, args: Sequence[Any] | None = None) -> Any:
        """Execute a read statement and return the open cursor.

        The caller reads and closes the cursor.
        """
        return self._execute(sql, args)

    def close(self) -> None:
        self.adapter.close(self.handle)
        logger.debug(f"Closed connection '{self.name}'")


class AsyncConnection:
    """Asynchronous named connection.

    Cancellation and timeouts are imposed by the caller through asyncio.
    """

    def __init__(self, name: str, dialect: Dialect, handle: Any, adapter: Any) -> None:
        self.name = name
        self.dialect = dialect
        self.handle = handle
        self.adapter = adapter
        self.schemas: dict[str, Schema] = {}

    @classmethod
    async def open(cls, config: ConnectionConfig) -> AsyncConnection:
        """Open (or adopt) the async database handle described by ``config``."""
        dialect = _resolve_dialect(config)
        adapter = _load_adapter(dialect, "async")
        if config.handle is not None:
            handle = config.handle
        else:
            try:
                handle = await adapter.connect_async(config)
            except Exception as e:
                raise ConnectionError(f"Cannot open connection '{config.name}': {e}") from e
            logger.debug(f"Opened async {dialect.name} connection '{config.name}'")
        return cls(config.name, dialect, handle, adapter)

    def get_schema(self, table: str) -> Schema | None:
        return self.schemas.get(table)

    async def _execute(
        self, sql: str, args: Sequence[Any] | None, text_order: bool = False
    ) -> Any:
        statement, values = bind_placeholders(
            sql, args, self.dialect, self.adapter.paramstyle, text_order
        )
        logger.debug(f"[{self.name}] {statement} with {len(values)} args")
        try:
            return await self.adapter.execute_async(self.handle, statement, values)
        except Exception as e:
            raise ExecutionError(sql, str(e)) from e

    async def exec(
        self, sql: str, args: Sequence[Any] | None = None, text_order: bool = False
    ) -> ExecResult:
        """Execute a write statement and commit it."""
        cursor = await self._execute(sql, args, text_order)
        try:
            rows = await cursor.fetchall() if cursor.description is not None else []
            await self.adapter.commit_async(self.handle)
            returned = rows[0] if rows else None
            return ExecResult(_last_insert_id(cursor, returned), int(cursor.rowcount))
        except Exception as e:
            raise ExecutionError(sql, str(e)) from e
        finally:
            await cursor.close()

    async def query(self, sql: str, args: Sequence[Any] | None = None) -> list[dict[str, Any]]:
        """Execute a read statement and return all rows as dicts."""
        cursor = await self._execute(sql, args)
        try:
            rows = await cursor.fetchall()
            if cursor.description is None:
                return []
            return rows_to_dicts([desc[0] for desc in cursor.description], rows)
        except Exception as e:
            raise ExecutionError(sql, str(e)) from e
        finally:
            await cursor.close()

    async def close(self) -> None:
        await self.adapter.close_async(self.handle)
        logger.debug(f"Closed async connection '{self.name}'")
