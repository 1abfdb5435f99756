"""Shared test fixtures."""

from __future__ import annotations

import pytest

from blog import BLOG_ENTITIES, DDL
from row_orm.core.connection import ConnectionConfig
from row_orm.core.engine import AsyncEngine, Engine


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config with the blog entities."""
    return ConnectionConfig(driver="sqlite", database=":memory:", entities=BLOG_ENTITIES)


@pytest.fixture
def engine(sqlite_config: ConnectionConfig):
    """Engine over an in-memory database with the blog tables created."""
    eng = Engine.from_config(sqlite_config)
    eng.get_connection().handle.executescript(DDL)
    yield eng
    eng.close()


@pytest.fixture
async def async_engine(sqlite_config: ConnectionConfig):
    """AsyncEngine over an in-memory aiosqlite database with the blog tables created."""
    eng = await AsyncEngine.from_config(sqlite_config)
    await eng.get_connection().handle.executescript(DDL)
    yield eng
    await eng.close()
