"""Unit tests for connection configuration and execution."""

from __future__ import annotations

import sqlite3

import pytest

from row_orm.core.connection import (
    AsyncConnection,
    Connection,
    ConnectionConfig,
    ExecResult,
    _last_insert_id,
)
from row_orm.core.dialect import POSTGRESQL, SQLITE3
from row_orm.core.exceptions import ConnectionError, DialectNotFoundError, ExecutionError  # noqa: A004


class RecordingAdapter:
    """Sync adapter that records statements and delegates to sqlite3."""

    paramstyle = "format"

    def __init__(self) -> None:
        self.statements: list[tuple[str, tuple]] = []

    def execute(self, connection, sql, args):
        self.statements.append((sql, tuple(args)))
        return connection.execute(sql.replace("%s", "?"), tuple(args))

    def commit(self, connection) -> None:
        connection.commit()

    def close(self, connection) -> None:
        connection.close()


@pytest.fixture
def memory_connection() -> Connection:
    conn = Connection.open(ConnectionConfig(driver="sqlite", database=":memory:"))
    conn.exec("CREATE TABLE t (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT)")
    return conn


class TestConnectionConfig:
    def test_defaults(self) -> None:
        config = ConnectionConfig(driver="sqlite")
        assert config.name == "default"
        assert config.database == ""
        assert config.entities == []
        assert config.handle is None

    def test_driver_required(self) -> None:
        with pytest.raises(ValueError):
            ConnectionConfig()  # type: ignore[call-arg]


class TestConnection:
    def test_open_resolves_dialect(self, memory_connection: Connection) -> None:
        assert memory_connection.dialect is SQLITE3
        assert memory_connection.name == "default"

    def test_unknown_driver(self) -> None:
        with pytest.raises(DialectNotFoundError):
            Connection.open(ConnectionConfig(driver="db2"))

    def test_adopts_handle(self) -> None:
        handle = sqlite3.connect(":memory:")
        conn = Connection.open(ConnectionConfig(driver="sqlite", handle=handle, dialect=SQLITE3))
        assert conn.handle is handle

    def test_open_failure(self, tmp_path) -> None:
        missing = tmp_path / "no" / "such" / "dir" / "db.sqlite"
        with pytest.raises(ConnectionError):
            Connection.open(ConnectionConfig(driver="sqlite", database=str(missing)))

    def test_exec_returns_result(self, memory_connection: Connection) -> None:
        result = memory_connection.exec("INSERT INTO t (name) VALUES (?)", ["a"])
        assert result == ExecResult(last_insert_id=1, rows_affected=1)

    def test_query_returns_cursor(self, memory_connection: Connection) -> None:
        memory_connection.exec("INSERT INTO t (name) VALUES (?)", ["a"])
        cursor = memory_connection.query("SELECT name FROM t WHERE id = ?", [1])
        assert cursor.fetchone()["name"] == "a"

    def test_driver_error_wrapped(self, memory_connection: Connection) -> None:
        with pytest.raises(ExecutionError, match="missing_table") as exc_info:
            memory_connection.query("SELECT * FROM missing_table")
        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)
        assert exc_info.value.sql == "SELECT * FROM missing_table"

    def test_placeholders_normalized_for_driver(self) -> None:
        adapter = RecordingAdapter()
        handle = sqlite3.connect(":memory:")
        conn = Connection("pg", POSTGRESQL, handle, adapter)
        conn.query("SELECT $1 + $2", [1, 2])
        assert adapter.statements == [("SELECT %s + %s", (1, 2))]


class TestLastInsertId:
    class _Cursor:
        lastrowid = 41

    def test_returned_tuple(self) -> None:
        assert _last_insert_id(self._Cursor(), (7,)) == 7

    def test_returned_dict(self) -> None:
        assert _last_insert_id(self._Cursor(), {"id": 9}) == 9

    def test_lastrowid(self) -> None:
        assert _last_insert_id(self._Cursor(), None) == 41


class TestAsyncConnection:
    async def test_exec_and_query(self) -> None:
        conn = await AsyncConnection.open(ConnectionConfig(driver="sqlite", database=":memory:"))
        await conn.exec("CREATE TABLE t (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT)")
        result = await conn.exec("INSERT INTO t (name) VALUES (?)", ["a"])
        assert result.last_insert_id == 1

        rows = await conn.query("SELECT id, name FROM t")
        assert rows == [{"id": 1, "name": "a"}]
        await conn.close()

    async def test_driver_error_wrapped(self) -> None:
        conn = await AsyncConnection.open(ConnectionConfig(driver="sqlite", database=":memory:"))
        with pytest.raises(ExecutionError):
            await conn.query("SELECT * FROM nowhere")
        await conn.close()
