"""MySQL adapter - sync (mysql-connector-python) and async (aiomysql)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from row_orm.core.connection import ConnectionConfig


class MysqlSyncAdapter:
    """Synchronous MySQL adapter using mysql-connector-python.

    Prepared cursors accept ``?`` markers, which is the MySQL dialect's
    native placeholder.
    """

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def connect(self, config: ConnectionConfig) -> Any:
        import mysql.connector

        return mysql.connector.connect(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database,
            **config.extra,
        )

    def execute(self, connection: Any, sql: str, args: Sequence[Any]) -> Any:
        """Execute SQL on a prepared cursor and return it."""
        cursor = connection.cursor(prepared=True)
        cursor.execute(sql, tuple(args))
        return cursor

    def commit(self, connection: Any) -> None:
        connection.commit()

    def close(self, connection: Any) -> None:
        connection.close()


class MysqlAsyncAdapter:
    """Asynchronous MySQL adapter using aiomysql."""

    @property
    def paramstyle(self) -> str:
        return "format"

    async def connect_async(self, config: ConnectionConfig) -> Any:
        import aiomysql

        return await aiomysql.connect(
            host=config.host,
            port=config.port or 3306,
            user=config.user,
            password=config.password or "",
            db=config.database,
            **config.extra,
        )

    async def execute_async(self, connection: Any, sql: str, args: Sequence[Any]) -> Any:
        """Execute SQL asynchronously and return the cursor."""
        cursor = await connection.cursor()
        await cursor.execute(sql, tuple(args))
        return cursor

    async def commit_async(self, connection: Any) -> None:
        await connection.commit()

    async def close_async(self, connection: Any) -> None:
        connection.close()
