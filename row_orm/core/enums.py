"""Database backend and join type enumerations."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


class JoinType(Enum):
    """SQL join kinds rendered by the select builder."""

    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL_OUTER = "FULL OUTER"
