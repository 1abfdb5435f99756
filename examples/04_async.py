"""
Example 04: Async Support

This example demonstrates the AsyncEngine with aiosqlite and a caller-side
timeout.
"""

import asyncio
from dataclasses import dataclass

from row_orm import AsyncEngine, AsyncRepository, ConnectionConfig, EntityConfigurator


@dataclass
class Task:
    id: int = 0
    title: str = ""
    done: bool = False

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("tasks")


async def main():
    engine = await AsyncEngine.from_config(
        ConnectionConfig(driver="sqlite", database=":memory:", entities=[Task])
    )
    await engine.get_connection().handle.execute(
        "CREATE TABLE tasks (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT, done INTEGER)"
    )

    tasks = AsyncRepository(engine, Task)
    await tasks.save(Task(title="write docs"))
    await tasks.save(Task(title="ship release"))

    first = await tasks.get(1)
    first.done = True
    await tasks.save(first)

    open_tasks = await asyncio.wait_for(tasks.where("done = ?", False), timeout=2)
    print("Open:", [t.title for t in open_tasks])

    await engine.close()


if __name__ == "__main__":
    asyncio.run(main())
