"""Database adapter protocols.

Every adapter module implements both protocols so the engines can treat all
supported drivers identically.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from row_orm.core.connection import ConnectionConfig


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Placeholder style the driver expects: 'qmark' (?) or 'format' (%s)."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a database handle."""
        ...

    def execute(self, connection: Any, sql: str, args: Sequence[Any]) -> Any:
        """Execute SQL with positional arguments and return a cursor-like object."""
        ...

    def commit(self, connection: Any) -> None:
        """Commit pending writes."""
        ...

    def close(self, connection: Any) -> None:
        """Close the handle."""
        ...


@runtime_checkable
class AsyncAdapter(Protocol):
    """Asynchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Placeholder style the driver expects: 'qmark' (?) or 'format' (%s)."""
        ...

    async def connect_async(self, config: ConnectionConfig) -> Any:
        """Open an async database handle."""
        ...

    async def execute_async(self, connection: Any, sql: str, args: Sequence[Any]) -> Any:
        """Execute SQL asynchronously and return a cursor-like object."""
        ...

    async def commit_async(self, connection: Any) -> None:
        """Commit pending writes."""
        ...

    async def close_async(self, connection: Any) -> None:
        """Close the async handle."""
        ...
