"""Repository base classes.

Thin per-entity wrappers over an Engine for DDD-oriented usage.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from row_orm.builder.select import Select

T = TypeVar("T")


class Repository(Generic[T]):
    """Base repository bound to one entity class.

    Subclasses add concrete finders on top of the generic ones.

    Args:
        engine: Initialized Engine the entity is registered on.
        entity: Entity class served by this repository.
    """

    def __init__(self, engine: Any, entity: type[T]) -> None:
        self.engine = engine
        self.entity = entity
        self.schema = engine.schema_for(entity)

    def _select(self) -> Select:
        return Select().select(*self.schema.columns(True)).from_(self.schema.table)

    def get(self, pk: Any) -> T:
        """Fetch by primary key. Raises NotFoundError when missing."""
        return self.engine.find(self.entity, pk)  # type: ignore[no-any-return]

    def all(self) -> list[T]:
        return self.engine.query(self.entity, self._select())  # type: ignore[no-any-return]

    def where(self, condition: str, *args: Any) -> list[T]:
        """Fetch entities matching a raw condition, e.g. ``where("age > ?", 18)``."""
        stmt = self._select().where(condition).with_args(*args)
        return self.engine.query(self.entity, stmt)  # type: ignore[no-any-return]

    def save(self, obj: T) -> T:
        self.engine.save(obj)
        return obj

    def delete(self, obj: T) -> int:
        return self.engine.delete(obj)  # type: ignore[no-any-return]


class AsyncRepository(Generic[T]):
    """Async variant of Repository."""

    def __init__(self, engine: Any, entity: type[T]) -> None:
        self.engine = engine
        self.entity = entity
        self.schema = engine.schema_for(entity)

    def _select(self) -> Select:
        return Select().select(*self.schema.columns(True)).from_(self.schema.table)

    async def get(self, pk: Any) -> T:
        return await self.engine.find(self.entity, pk)  # type: ignore[no-any-return]

    async def all(self) -> list[T]:
        return await self.engine.query(self.entity, self._select())  # type: ignore[no-any-return]

    async def where(self, condition: str, *args: Any) -> list[T]:
        stmt = self._select().where(condition).with_args(*args)
        return await self.engine.query(self.entity, stmt)  # type: ignore[no-any-return]

    async def save(self, obj: T) -> T:
        await self.engine.save(obj)
        return obj

    async def delete(self, obj: T) -> int:
        return await self.engine.delete(obj)  # type: ignore[no-any-return]
