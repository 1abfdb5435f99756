"""
Example 02: Statement Builder

This example demonstrates building SQL with Select, Insert, Update and
Delete, and running built statements through the Engine.
"""

from dataclasses import dataclass

from row_orm import POSTGRESQL, ConnectionConfig, Delete, Engine, EntityConfigurator, Insert, Select, Update
from row_orm import helpers as h


@dataclass
class Product:
    id: int = 0
    name: str = ""
    price: float = 0.0
    stock: int = 0

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("products")


def main():
    # Builders only render SQL; no database needed
    sql, args = (
        Select()
        .select("id", "name")
        .from_("products")
        .where(h.greater("price", "?"))
        .and_(h.group(h.less("stock", "?"), "OR", h.is_null("stock")))
        .with_args(10, 5)
        .order_by("price", desc=True)
        .limit(20)
        .build()
    )
    print(sql, args)

    # Numbered placeholders continue across rows
    print(Insert(POSTGRESQL).table("products").into("name", "price").row("pen", 1.5).row("ink", 4.0).build())

    # Run built statements against SQLite
    engine = Engine.from_config(
        ConnectionConfig(driver="sqlite", database=":memory:", entities=[Product])
    )
    engine.get_connection().handle.execute(
        "CREATE TABLE products (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, price REAL, stock INTEGER)"
    )
    engine.insert_all(
        Product(name="Widget", price=9.99, stock=100),
        Product(name="Gadget", price=24.99, stock=3),
        Product(name="Gizmo", price=14.99, stock=0),
    )

    engine.exec(Product, Update().table("products").set("stock", "stock + ?").where("name = ?").with_args(10, "Gizmo"))
    engine.exec(Product, Delete().table("products").where(h.less("price", "?")).with_args(10))

    for product in engine.query(Product, Select().from_("products").order_by("price")):
        print(product)

    engine.close()


if __name__ == "__main__":
    main()
