"""Unit tests for the repository base classes."""

from __future__ import annotations

import pytest

from blog import Tag, User
from row_orm.core.engine import AsyncEngine, Engine
from row_orm.core.exceptions import NotFoundError
from row_orm.repository.base import AsyncRepository, Repository


class TagRepository(Repository[Tag]):
    def __init__(self, engine: Engine) -> None:
        super().__init__(engine, Tag)

    def by_label(self, label: str) -> list[Tag]:
        return self.where("label = ?", label)


class TestRepository:
    def test_save_and_get(self, engine: Engine) -> None:
        repo = TagRepository(engine)
        tag = repo.save(Tag(label="python"))
        assert repo.get(tag.id) == tag

    def test_all_and_where(self, engine: Engine) -> None:
        repo = TagRepository(engine)
        repo.save(Tag(label="a"))
        repo.save(Tag(label="b"))
        assert [t.label for t in repo.all()] == ["a", "b"]
        assert [t.label for t in repo.by_label("b")] == ["b"]

    def test_delete(self, engine: Engine) -> None:
        repo = Repository(engine, User)
        user = repo.save(User(name="ada", email="a@x"))
        assert repo.delete(user) == 1
        with pytest.raises(NotFoundError):
            repo.get(user.id)

    def test_schema_bound(self, engine: Engine) -> None:
        assert Repository(engine, User).schema.table == "users"


class TestAsyncRepository:
    async def test_round_trip(self, async_engine: AsyncEngine) -> None:
        repo = AsyncRepository(async_engine, Tag)
        tag = await repo.save(Tag(label="async"))
        assert await repo.get(tag.id) == tag
        assert [t.label for t in await repo.where("label = ?", "async")] == ["async"]
        assert await repo.delete(tag) == 1
        assert await repo.all() == []
