from __future__ import annotations

from sqlite3 import Connection, Row
from typing import Optional


def ensure_schema(conn: Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS todos(
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL UNIQUE,
            description TEXT,
            complete BOOLEAN DEFAULT false
        )
        """
    )


def insert_todo(conn: Connection, title: str, description: str | None, complete: bool) -> int:
    cur = conn.execute(
        "INSERT INTO todos(title, description, complete) VALUES(?,?,?)",
        (title, description, 1 if complete else 0),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, todo_id: int) -> Optional[Row]:
    return conn.execute(
        "SELECT id, title, description, complete FROM todos WHERE id=?",
        (todo_id,),
    ).fetchone()


def list_all(conn: Connection) -> list[Row]:
    return conn.execute("SELECT id, title, description, complete FROM todos").fetchall()


def table_exists(conn: Connection) -> bool:
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name='todos'"
    ).fetchone()
    return row is not None
