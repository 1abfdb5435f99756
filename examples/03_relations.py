"""
Example 03: Relations

This example demonstrates HasOne, HasMany, BelongsTo and BelongsToMany
relations and the schema report.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from row_orm import BelongsToMany, ConnectionConfig, Engine, EntityConfigurator, RelationConfigurator


@dataclass
class Author:
    id: int = 0
    name: str = ""
    books: list[Book] = field(default_factory=list)

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("authors")

    @classmethod
    def configure_relations(cls, r: RelationConfigurator) -> None:
        r.has_one(Biography).has_many(Book)


@dataclass
class Biography:
    id: int = 0
    author_id: int = 0
    text: str = ""

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("biographies")


@dataclass
class Book:
    id: int = 0
    author_id: int = 0
    title: str = ""

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("books")

    @classmethod
    def configure_relations(cls, r: RelationConfigurator) -> None:
        r.belongs_to(Author).belongs_to_many(Genre, BelongsToMany(intermediate_table="book_genres"))


@dataclass
class Genre:
    id: int = 0
    name: str = ""

    @classmethod
    def configure_entity(cls, e: EntityConfigurator) -> None:
        e.table("genres")


DDL = """
CREATE TABLE authors (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT);
CREATE TABLE biographies (id INTEGER PRIMARY KEY AUTOINCREMENT, author_id INTEGER, text TEXT);
CREATE TABLE books (id INTEGER PRIMARY KEY AUTOINCREMENT, author_id INTEGER, title TEXT);
CREATE TABLE genres (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT);
CREATE TABLE book_genres (book_id INTEGER, genre_id INTEGER);
"""


def main():
    engine = Engine.from_config(
        ConnectionConfig(
            driver="sqlite",
            database=":memory:",
            entities=[Author, Biography, Book, Genre],
        )
    )
    engine.get_connection().handle.executescript(DDL)

    author = Author(name="Ursula")
    engine.insert(author)
    engine.insert(Biography(author_id=author.id, text="Novelist and poet."))

    book = Book(author_id=author.id, title="The Dispossessed")
    engine.insert(book)
    for name in ("science fiction", "utopia"):
        genre = Genre(name=name)
        engine.insert(genre)
        engine.exec_raw(Book, "INSERT INTO book_genres (book_id, genre_id) VALUES (?, ?)", book.id, genre.id)

    print("Biography:", engine.has_one(author, Biography).text)
    print("Books:", [b.title for b in engine.has_many(author, Book)])
    print("Author of book:", engine.belongs_to(book, Author).name)
    print("Genres:", [g.name for g in engine.belongs_to_many(book, Genre)])

    engine.schematic()
    engine.close()


if __name__ == "__main__":
    main()
