"""Human-readable dump of registered schemas."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from rich.console import Console
from rich.table import Table

from row_orm.schema.schema import Schema


def schema_table(schema: Schema) -> Table:
    """Rich table listing the fields of one schema."""
    table = Table(title=schema.table, title_justify="left")
    table.add_column("SQL Name", style="cyan")
    table.add_column("Type")
    table.add_column("Is Primary Key", justify="center")
    table.add_column("Is Virtual", justify="center")
    for field in schema.fields:
        table.add_row(
            field.column,
            field.type.value,
            "yes" if field.is_pk else "",
            "yes" if field.is_virtual else "",
        )
    return table


def relation_lines(schema: Schema) -> list[str]:
    """One ``<table> <cardinality> <related>`` line per declared relation."""
    return [
        f"{schema.table} {config.cardinality} {related}"
        for related, config in schema.relations.items()
    ]


def render_schematic(connections: Iterable[Any], console: Console | None = None) -> None:
    """Print every connection's dialect, tables and relations.

    Args:
        connections: Connection or AsyncConnection objects.
        console: Target console. Defaults to a stdout console.
    """
    console = console or Console()
    for connection in connections:
        console.rule(f"[bold]{connection.name}")
        console.print(f"SQL Dialect: {connection.dialect.name}")
        for schema in connection.schemas.values():
            console.print(schema_table(schema))
            for line in relation_lines(schema):
                console.print(line, highlight=False)
