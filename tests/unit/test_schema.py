"""Unit tests for entity reflection."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

import pytest
from pydantic import BaseModel, ConfigDict

from blog import Comment, Post, Profile, Status, Tag, User
from row_orm.core.dialect import POSTGRESQL
from row_orm.core.exceptions import ConfigurationError, MissingTableNameError, PrimaryKeyError
from row_orm.schema import (
    BelongsTo,
    BelongsToMany,
    Entity,
    EntityConfigurator,
    FieldType,
    HasMany,
    HasOne,
    RelationConfigurator,
    schema_of,
    table_name_of,
)


@dataclass
class NoTable:
    id: int = 0

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        pass


@dataclass
class NoKey:
    name: str = ""

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("no_keys")


@dataclass
class Invoice:
    number: str = ""
    totalAmount: Decimal = Decimal("0")
    lines: list[str] = field(default_factory=list)

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("invoices").primary_key("number")


class Account(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    owner: str
    balance: float = 0.0

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("accounts").connection("ledger")


class Note:
    def __init__(self, id: int, text: str, pinned: bool = False) -> None:
        self.id = id
        self.text = text
        self.pinned = pinned

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("notes")


class TestSchemaOf:
    def test_table_and_dialect(self) -> None:
        schema = schema_of(User, POSTGRESQL, "default")
        assert schema.table == "users"
        assert schema.dialect is POSTGRESQL
        assert schema.connection == "default"
        assert schema.primary_key_column == "id"

    def test_collections_and_nested_entities_skipped(self) -> None:
        schema = schema_of(User)
        assert [f.name for f in schema.fields] == ["id", "name", "email", "is_admin"]

    def test_columns_with_and_without_pk(self) -> None:
        schema = schema_of(User)
        assert schema.columns(True) == ["id", "name", "email", "is_admin"]
        assert schema.columns(False) == ["name", "email", "is_admin"]

    def test_field_types(self) -> None:
        types = {f.name: f.type for f in schema_of(Post).fields}
        assert types["id"] is FieldType.INTEGER
        assert types["title"] is FieldType.TEXT
        assert types["status"] is FieldType.ENUM
        assert types["comment_count"] is FieldType.INTEGER
        assert schema_of(User).field_for_column("is_admin").type is FieldType.BOOLEAN

    def test_virtual_fields_not_persisted(self) -> None:
        schema = schema_of(Post)
        assert "comment_count" not in schema.columns(True)
        assert schema.field_for_column("comment_count").is_virtual

    def test_column_override(self) -> None:
        schema = schema_of(Comment)
        assert schema.columns(False) == ["post_id", "author_name", "body"]
        assert schema.field_for_column("author_name").name == "author"

    def test_snake_case_columns_and_primary_key_override(self) -> None:
        schema = schema_of(Invoice)
        assert schema.columns(True) == ["number", "total_amount"]
        assert schema.primary_key.name == "number"
        assert schema.columns(False) == ["total_amount"]
        assert schema.field_for_column("total_amount").type is FieldType.DECIMAL

    def test_pydantic_model(self) -> None:
        schema = schema_of(Account)
        assert schema.columns(True) == ["id", "owner", "balance"]
        assert schema.connection == "ledger"

    def test_plain_class(self) -> None:
        schema = schema_of(Note)
        assert schema.columns(True) == ["id", "text", "pinned"]
        assert schema.field_for_column("pinned").type is FieldType.BOOLEAN

    def test_missing_table(self) -> None:
        with pytest.raises(MissingTableNameError, match="NoTable"):
            schema_of(NoTable)

    def test_missing_primary_key(self) -> None:
        with pytest.raises(PrimaryKeyError):
            schema_of(NoKey)

    def test_virtual_primary_key_rejected(self) -> None:
        @dataclass
        class VirtualKey:
            id: int = 0

            @classmethod
            def configure_entity(cls, e: EntityConfigurator) -> None:
                e.table("vk").virtual("id")

        with pytest.raises(PrimaryKeyError):
            schema_of(VirtualKey)

    def test_unknown_override(self) -> None:
        @dataclass
        class Typo:
            id: int = 0

            @classmethod
            def configure_entity(cls, e: EntityConfigurator) -> None:
                e.table("typos").column("nmae", "name")

        with pytest.raises(ConfigurationError, match="nmae"):
            schema_of(Typo)

    def test_table_name_of(self) -> None:
        assert table_name_of(Tag) == "tags"


class TestRelations:
    def test_relations_keyed_by_related_table(self) -> None:
        relations = schema_of(Post).relations
        assert set(relations) == {"users", "comments", "tags"}
        assert isinstance(relations["users"], BelongsTo)
        assert isinstance(relations["comments"], HasMany)
        assert relations["tags"] == BelongsToMany(intermediate_table="post_tags")

    def test_default_configs(self) -> None:
        relations = schema_of(User).relations
        assert relations["profiles"] == HasOne()
        assert relations["posts"] == HasMany()

    def test_relations_read_only(self) -> None:
        relations = schema_of(Profile).relations
        with pytest.raises(TypeError):
            relations["x"] = HasOne()  # type: ignore[index]

    def test_no_relations_hook(self) -> None:
        assert dict(schema_of(Invoice).relations) == {}

    def test_cardinality(self) -> None:
        assert HasOne.cardinality == "1-1"
        assert HasMany.cardinality == "1-N"
        assert BelongsTo.cardinality == "N-1"
        assert BelongsToMany.cardinality == "N-N"

    def test_configurator_chains(self) -> None:
        r = RelationConfigurator()
        assert r.has_one(Profile) is r
        assert set(r.relations) == {"profiles"}


class TestInstances:
    def test_new_instance_zero_values(self) -> None:
        note = schema_of(Note).new_instance()
        assert (note.id, note.text, note.pinned) == (0, "", False)

    def test_new_pydantic_instance(self) -> None:
        account = schema_of(Account).new_instance()
        assert isinstance(account, Account)
        assert account.id == 0
        assert account.owner == ""

    def test_values_of_converts_enums(self) -> None:
        post = Post(id=4, user_id=1, title="Hello", status=Status.PUBLISHED, comment_count=9)
        schema = schema_of(Post)
        assert schema.values_of(post, include_pk=True) == [4, 1, "Hello", "published"]
        assert schema.values_of(post, include_pk=False) == [1, "Hello", "published"]

    def test_zero_pk(self) -> None:
        schema = schema_of(User)
        assert schema.has_zero_pk(User())
        assert not schema.has_zero_pk(User(id=3))

    def test_set_pk_on_frozen_model(self) -> None:
        schema = schema_of(Account)
        account = Account(id=0, owner="ada")
        schema.set_pk_value(account, 12)
        assert account.id == 12


class TestEntityProtocol:
    def test_blog_entities_satisfy_protocol(self) -> None:
        for entity in (User, Profile, Post, Comment, Tag):
            assert isinstance(entity, Entity)
