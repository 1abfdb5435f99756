"""Unit tests for placeholder normalization."""

from __future__ import annotations

import pytest

from row_orm.core.dialect import MYSQL, POSTGRESQL, SQLITE3
from row_orm.core.exceptions import QueryBuildError
from row_orm.core.params import bind_placeholders, coerce_args, normalize_placeholders


class TestNormalizePlaceholders:
    def test_qmark_passthrough(self) -> None:
        sql = "SELECT * FROM users WHERE id = ?"
        assert normalize_placeholders(sql, SQLITE3, "qmark") == sql

    def test_qmark_to_format(self) -> None:
        sql = "SELECT * FROM users WHERE id = ? AND name = ?"
        expected = "SELECT * FROM users WHERE id = %s AND name = %s"
        assert normalize_placeholders(sql, MYSQL, "format") == expected

    def test_numbered_to_format(self) -> None:
        sql = "SELECT * FROM users WHERE id = $1 AND name = $2"
        expected = "SELECT * FROM users WHERE id = %s AND name = %s"
        assert normalize_placeholders(sql, POSTGRESQL, "format") == expected

    def test_numbered_to_qmark(self) -> None:
        sql = "DELETE FROM users WHERE id = $1"
        assert normalize_placeholders(sql, POSTGRESQL, "qmark") == "DELETE FROM users WHERE id = ?"

    def test_numbered_keeps_text_order(self) -> None:
        sql = "UPDATE posts SET title = $2, body = $3 WHERE id = $1"
        expected = "UPDATE posts SET title = %s, body = %s WHERE id = %s"
        assert normalize_placeholders(sql, POSTGRESQL, "format") == expected

    def test_string_literal_exclusion(self) -> None:
        sql = "SELECT * FROM t WHERE note = 'why?' AND id = ?"
        expected = "SELECT * FROM t WHERE note = 'why?' AND id = %s"
        assert normalize_placeholders(sql, MYSQL, "format") == expected

    def test_dollar_inside_literal_untouched(self) -> None:
        sql = "SELECT * FROM t WHERE price = '$1' AND id = $1"
        expected = "SELECT * FROM t WHERE price = '$1' AND id = %s"
        assert normalize_placeholders(sql, POSTGRESQL, "format") == expected

    def test_percent_escaped_for_format(self) -> None:
        sql = "SELECT * FROM t WHERE name LIKE 'a%' AND rate > 5 % 2 AND id = ?"
        expected = "SELECT * FROM t WHERE name LIKE 'a%%' AND rate > 5 %% 2 AND id = %s"
        assert normalize_placeholders(sql, MYSQL, "format") == expected

    def test_unknown_paramstyle(self) -> None:
        with pytest.raises(ValueError, match="named"):
            normalize_placeholders("SELECT 1", SQLITE3, "named")

    def test_no_placeholders(self) -> None:
        assert normalize_placeholders("SELECT 1", POSTGRESQL, "format") == "SELECT 1"


class TestBindPlaceholders:
    def test_out_of_order_numbers_bind_by_number(self) -> None:
        sql, args = bind_placeholders(
            "UPDATE tags SET label = $2 WHERE id = $1", [5, "x"], POSTGRESQL, "format"
        )
        assert sql == "UPDATE tags SET label = %s WHERE id = %s"
        assert args == ("x", 5)

    def test_repeated_number_reuses_argument(self) -> None:
        sql, args = bind_placeholders(
            "DELETE FROM tags WHERE id = $1 OR id = $1 + 100", [7], POSTGRESQL, "format"
        )
        assert sql == "DELETE FROM tags WHERE id = %s OR id = %s + 100"
        assert args == (7, 7)

    def test_number_without_argument(self) -> None:
        with pytest.raises(QueryBuildError, match=r"\$3"):
            bind_placeholders("SELECT $1, $3", [1, 2], POSTGRESQL, "qmark")

    def test_zero_is_not_a_position(self) -> None:
        with pytest.raises(QueryBuildError):
            bind_placeholders("SELECT $0", [1], POSTGRESQL, "format")

    def test_text_order_passes_args_through(self) -> None:
        sql, args = bind_placeholders(
            "UPDATE posts SET title = $2 WHERE id = $1",
            ["new", 8],
            POSTGRESQL,
            "format",
            text_order=True,
        )
        assert sql == "UPDATE posts SET title = %s WHERE id = %s"
        assert args == ("new", 8)

    def test_literal_numbers_ignored(self) -> None:
        _, args = bind_placeholders("SELECT '$2', $1", ["a"], POSTGRESQL, "format")
        assert args == ("a",)

    def test_qmark_dialect_passthrough(self) -> None:
        assert bind_placeholders("SELECT ?", [1], SQLITE3, "qmark") == ("SELECT ?", (1,))


class TestCoerceArgs:
    def test_none(self) -> None:
        assert coerce_args(None) == ()

    def test_list(self) -> None:
        assert coerce_args([1, "a"]) == (1, "a")
