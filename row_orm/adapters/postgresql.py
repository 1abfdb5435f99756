"""PostgreSQL adapter - sync and async using psycopg (v3+)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from row_orm.core.connection import ConnectionConfig


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    parts.append(f"dbname={config.database}")
    return " ".join(parts)


class PostgresqlSyncAdapter:
    """Synchronous PostgreSQL adapter using psycopg (v3+)."""

    @property
    def paramstyle(self) -> str:
        return "format"

    def connect(self, config: ConnectionConfig) -> Any:
        import psycopg

        return psycopg.connect(_build_conninfo(config), **config.extra)

    def execute(self, connection: Any, sql: str, args: Sequence[Any]) -> Any:
        return connection.execute(sql, tuple(args))

    def commit(self, connection: Any) -> None:
        connection.commit()

    def close(self, connection: Any) -> None:
        connection.close()


class PostgresqlAsyncAdapter:
    """Asynchronous PostgreSQL adapter using psycopg (v3+) async support."""

    @property
    def paramstyle(self) -> str:
        return "format"

    async def connect_async(self, config: ConnectionConfig) -> Any:
        import psycopg

        return await psycopg.AsyncConnection.connect(_build_conninfo(config), **config.extra)

    async def execute_async(self, connection: Any, sql: str, args: Sequence[Any]) -> Any:
        return await connection.execute(sql, tuple(args))

    async def commit_async(self, connection: Any) -> None:
        await connection.commit()

    async def close_async(self, connection: Any) -> None:
        await connection.close()
