"""Integration test for the async SQLite ORM workflow (aiosqlite)."""

from __future__ import annotations

import asyncio

import pytest

from blog import Comment, Post, Profile, Status, Tag, User
from row_orm.builder import Select
from row_orm.core.engine import AsyncEngine
from row_orm.core.exceptions import NotFoundError


async def _seed(engine: AsyncEngine) -> tuple[User, Post]:
    ada = User(name="ada", email="ada@example.com")
    await engine.insert(ada)
    await engine.insert(Profile(user_id=ada.id, bio="Mathematician"))
    post = Post(user_id=ada.id, title="Notes", status=Status.PUBLISHED)
    await engine.insert(post)
    tag = Tag(label="math")
    await engine.insert(tag)
    await engine.exec_raw(Post, "INSERT INTO post_tags (post_id, tag_id) VALUES (?, ?)", post.id, tag.id)
    await engine.insert_all(
        Comment(post_id=post.id, author="bob", body="Great"),
        Comment(post_id=post.id, author="eve", body="Thanks"),
    )
    return ada, post


class TestAsyncCrud:
    async def test_insert_find_round_trip(self, async_engine: AsyncEngine) -> None:
        user = User(name="ada", email="ada@example.com", is_admin=True)
        await async_engine.insert(user)
        assert user.id == 1
        assert await async_engine.find(User, user.id) == user

    async def test_find_missing(self, async_engine: AsyncEngine) -> None:
        with pytest.raises(NotFoundError):
            await async_engine.find(User, 404)

    async def test_save_update_delete(self, async_engine: AsyncEngine) -> None:
        tag = Tag(label="draft")
        await async_engine.save(tag)
        tag.label = "final"
        await async_engine.save(tag)
        assert (await async_engine.find(Tag, tag.id)).label == "final"

        assert await async_engine.delete(tag) == 1
        assert await async_engine.query(Tag, Select().from_("tags")) == []

    async def test_batch_insert(self, async_engine: AsyncEngine) -> None:
        assert await async_engine.insert_all(Tag(label="a"), Tag(label="b")) == 2
        assert await async_engine.insert_all() == 0

    async def test_query_raw(self, async_engine: AsyncEngine) -> None:
        await _seed(async_engine)
        posts = await async_engine.query_raw(Post, "SELECT * FROM posts WHERE status = ?", "published")
        assert [p.title for p in posts] == ["Notes"]

    async def test_caller_timeout(self, async_engine: AsyncEngine) -> None:
        await _seed(async_engine)
        users = await asyncio.wait_for(async_engine.query(User, Select().from_("users")), timeout=5)
        assert len(users) == 1


class TestAsyncRelations:
    async def test_has_one_and_belongs_to(self, async_engine: AsyncEngine) -> None:
        ada, post = await _seed(async_engine)
        assert (await async_engine.has_one(ada, Profile)).bio == "Mathematician"
        assert await async_engine.belongs_to(post, User) == ada

    async def test_has_many(self, async_engine: AsyncEngine) -> None:
        _, post = await _seed(async_engine)
        comments = await async_engine.has_many(post, Comment)
        assert sorted(c.author for c in comments) == ["bob", "eve"]

    async def test_belongs_to_many(self, async_engine: AsyncEngine) -> None:
        _, post = await _seed(async_engine)
        assert [t.label for t in await async_engine.belongs_to_many(post, Tag)] == ["math"]
