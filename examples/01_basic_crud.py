"""
Example 01: Basic CRUD

This example demonstrates registering an entity and running insert, find,
update, save and delete through RowORM's Engine.
"""

from dataclasses import dataclass

from row_orm import ConnectionConfig, Engine, EntityConfigurator, NotFoundError


@dataclass
class User:
    id: int = 0
    name: str = ""
    email: str = ""
    active: bool = True

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("users")


def main():
    engine = Engine.from_config(
        ConnectionConfig(driver="sqlite", database=":memory:", entities=[User])
    )
    engine.get_connection().handle.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            active INTEGER NOT NULL DEFAULT 1
        )
    """)

    # Insert writes the generated key back into the entity
    alice = User(name="Alice", email="alice@example.com")
    engine.insert(alice)
    print(f"Inserted {alice}")

    # Batch insert
    count = engine.insert_all(
        User(name="Bob", email="bob@example.com"),
        User(name="Charlie", email="charlie@example.com", active=False),
    )
    print(f"Batch inserted {count} users")

    # Find by primary key
    print(f"Found: {engine.find(User, alice.id)}")

    # Update and save
    alice.email = "alice@work.example.com"
    engine.update(alice)
    alice.active = False
    engine.save(alice)
    print(f"After update: {engine.find(User, alice.id)}")

    # Delete
    engine.delete(alice)
    try:
        engine.find(User, alice.id)
    except NotFoundError as e:
        print(f"Deleted: {e}")

    engine.close()


if __name__ == "__main__":
    main()
