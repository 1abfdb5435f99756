"""Per-database SQL conventions.

Only three driver families are recognized. Each Dialect is immutable and
shared by every connection of its family.
"""

from __future__ import annotations

from dataclasses import dataclass

from row_orm.core.enums import DatabaseBackend
from row_orm.core.exceptions import DialectNotFoundError


@dataclass(frozen=True)
class Dialect:
    """Placeholder style for one database family."""

    name: str
    backend: DatabaseBackend
    placeholder_char: str
    include_index_in_placeholder: bool
    supports_returning: bool = False

    def placeholder(self, position: int = 1) -> str:
        """Render the placeholder for a 1-based argument position."""
        if self.include_index_in_placeholder:
            return f"{self.placeholder_char}{position}"
        return self.placeholder_char

    def placeholders(self, count: int, start: int = 1) -> list[str]:
        """Render ``count`` placeholders, numbering from ``start`` when numbered."""
        return [self.placeholder(start + offset) for offset in range(count)]


MYSQL = Dialect(
    name="mysql",
    backend=DatabaseBackend.MYSQL,
    placeholder_char="?",
    include_index_in_placeholder=False,
)

SQLITE3 = Dialect(
    name="sqlite3",
    backend=DatabaseBackend.SQLITE,
    placeholder_char="?",
    include_index_in_placeholder=False,
)

POSTGRESQL = Dialect(
    name="postgres",
    backend=DatabaseBackend.POSTGRESQL,
    placeholder_char="$",
    include_index_in_placeholder=True,
    supports_returning=True,
)

_DRIVER_DIALECTS: dict[str, Dialect] = {
    "mysql": MYSQL,
    "sqlite": SQLITE3,
    "sqlite3": SQLITE3,
    "postgres": POSTGRESQL,
    "postgresql": POSTGRESQL,
}


def get_dialect(driver: str) -> Dialect:
    """Return the dialect for a driver identifier.

    Raises:
        DialectNotFoundError: If the driver is not one of the supported families.
    """
    try:
        return _DRIVER_DIALECTS[driver.lower()]
    except KeyError:
        raise DialectNotFoundError(driver) from None
