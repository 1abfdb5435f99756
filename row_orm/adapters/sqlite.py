"""SQLite adapter - sync (sqlite3 stdlib) and async (aiosqlite)."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from typing import Any

from row_orm.core.connection import ConnectionConfig


class SqliteSyncAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        """Open a connection with row access by column name."""
        conn = sqlite3.connect(config.database, **config.extra)
        conn.row_factory = sqlite3.Row
        if config.database != ":memory:":
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        args: Sequence[Any],
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        return connection.execute(sql, tuple(args))

    def commit(self, connection: sqlite3.Connection) -> None:
        connection.commit()

    def close(self, connection: sqlite3.Connection) -> None:
        connection.close()


class SqliteAsyncAdapter:
    """Asynchronous SQLite adapter using aiosqlite."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    async def connect_async(self, config: ConnectionConfig) -> Any:
        """Open an aiosqlite connection."""
        import aiosqlite

        conn = await aiosqlite.connect(config.database, **config.extra)
        conn.row_factory = aiosqlite.Row
        if config.database != ":memory:":
            await conn.execute("PRAGMA journal_mode=WAL")
        return conn

    async def execute_async(self, connection: Any, sql: str, args: Sequence[Any]) -> Any:
        """Execute SQL asynchronously and return a cursor."""
        return await connection.execute(sql, tuple(args))

    async def commit_async(self, connection: Any) -> None:
        await connection.commit()

    async def close_async(self, connection: Any) -> None:
        await connection.close()
