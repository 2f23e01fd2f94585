"""Scan one joined row into several records using column prefixes."""

from __future__ import annotations

import sqlite3
import sys
from dataclasses import dataclass, field
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_crud").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_crud import Crud, Database, scan, select_columns


@dataclass
class Author:
    id: int = field(default=0, metadata={"sql": "id,readonly"})
    name: str = field(default="", metadata={"sql": "name"})


@dataclass
class Post:
    id: int = field(default=0, metadata={"sql": "id,readonly"})
    author_id: int = field(default=0, metadata={"sql": "author_id"})
    title: str = field(default="", metadata={"sql": "title"})


def main() -> None:
    conn = sqlite3.connect(":memory:")
    db = Database(conn)
    crud = Crud(db, db.crud_config())

    try:
        conn.executescript(
            """
            CREATE TABLE authors (id INTEGER PRIMARY KEY, name TEXT);
            CREATE TABLE posts (id INTEGER PRIMARY KEY, author_id INTEGER, title TEXT);
            """
        )
        author_id = crud.insert("authors", "id", Author(name="Alice"))
        crud.insert("posts", "id", Post(author_id=author_id, title="Hello"))
        crud.insert("posts", "id", Post(author_id=author_id, title="Again"))

        # Alias every column with a prefix, then pass the same prefix to scan().
        sql = (
            f"SELECT {select_columns(Author, table_alias='a', prefix='a_')}, "
            f"{select_columns(Post, table_alias='p', prefix='p_')} "
            "FROM posts p JOIN authors a ON a.id = p.author_id ORDER BY p.id"
        )
        cursor = db.query(sql)
        try:
            while cursor.next():
                author, post = Author(), Post()
                scan(cursor, "a_", author, "p_", post)
                print(author.name, "wrote", repr(post.title))
        finally:
            cursor.close()
    finally:
        db.close()


if __name__ == "__main__":
    main()
