"""Unit tests for naming conventions."""

from __future__ import annotations

import pytest

from row_orm.schema.naming import foreign_key_for, singular, snake_case


class TestSnakeCase:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("id", "id"),
            ("createdAt", "created_at"),
            ("UserID", "user_id"),
            ("HTTPStatus", "http_status"),
            ("already_snake", "already_snake"),
        ],
    )
    def test_conversion(self, name: str, expected: str) -> None:
        assert snake_case(name) == expected


class TestSingular:
    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("posts", "post"),
            ("users", "user"),
            ("categories", "category"),
            ("people", "person"),
            ("post", "post"),
            ("", ""),
        ],
    )
    def test_singular(self, word: str, expected: str) -> None:
        assert singular(word) == expected

    def test_foreign_key(self) -> None:
        assert foreign_key_for("posts") == "post_id"
