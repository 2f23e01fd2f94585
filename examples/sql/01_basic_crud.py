"""Basic insert/update/fetch example for mini_crud."""

from __future__ import annotations

import sqlite3
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_crud").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_crud import Crud, Database, Int32


@dataclass
class User:
    # Read-only columns are never written by insert/update.
    id: int = field(default=0, metadata={"sql": "id,readonly"})
    email: str = field(default="", metadata={"sql": "email"})
    age: Optional[Int32] = field(default=None, metadata={"sql": "age"})
    # Stored as epoch seconds.
    joined: Optional[datetime] = field(default=None, metadata={"sql": "joined,unix"})


def main() -> None:
    # 1) Create DB adapter and CRUD helper with driver placeholders.
    conn = sqlite3.connect(":memory:")
    db = Database(conn)
    crud = Crud(db, db.crud_config())

    try:
        conn.execute(
            "CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT, age INTEGER, joined INTEGER)"
        )

        # 2) Insert rows; the generated id is returned.
        alice_id = crud.insert(
            "users", "id", User(email="alice@example.com", joined=datetime.now(timezone.utc))
        )
        bob_id = crud.insert("users", "id", User(email="bob@example.com", age=30))
        print("Inserted ids:", alice_id, bob_id)

        # 3) Fetch one row back into a record.
        bob = crud.fetch_one(User, "SELECT * FROM users WHERE id = ?", [bob_id])
        print("Fetched:", bob)

        # 4) Update by id.
        if bob is not None:
            bob.age = 31
            crud.update("users", "id", bob)

        # 5) Fetch all rows.
        print("All users:", crud.fetch_all(User, "SELECT * FROM users ORDER BY id"))
    finally:
        db.close()


if __name__ == "__main__":
    main()
