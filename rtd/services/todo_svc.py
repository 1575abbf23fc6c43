from __future__ import annotations

# rtd/services/todo_svc.py
import logging
from sqlite3 import Connection

from ..db import open_connection
from ..domain.todo import Todo
from ..errors import NotFound, translate_errors
from ..repository import todo_repo

logger = logging.getLogger(__name__)

# SQLite INTEGER range; ids outside it can never have been assigned
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def initialize_schema(conn: Connection) -> None:
    """Create the todos table if it does not exist yet; safe on every startup."""
    with translate_errors("initialize schema"):
        existed = todo_repo.table_exists(conn)
        todo_repo.ensure_schema(conn)
        conn.commit()
    logger.debug("todos table already present" if existed else "created todos table")


def insert(conn: Connection, todo: Todo) -> Todo:
    """Store `todo` as given (title untouched) and return it carrying the new id."""
    if not todo.title or not todo.title.strip():
        raise ValueError("title required")
    if todo.description is None:
        todo = Todo(title=todo.title, description="", complete=todo.complete)
    with translate_errors(f"insert todo {todo.title!r}"):
        todo_id = todo_repo.insert_todo(conn, todo.title, todo.description, todo.complete)
        conn.commit()
    logger.debug(f"inserted todo #{todo_id}: {todo.title}")
    return todo.with_id(todo_id)


def fetch_by_id(conn: Connection, todo_id: int) -> Todo:
    if not MIN_ID <= todo_id <= MAX_ID:
        raise NotFound(todo_id)
    with translate_errors(f"fetch todo #{todo_id}"):
        row = todo_repo.get_one(conn, todo_id)
    if row is None:
        raise NotFound(todo_id)
    return Todo.from_row(row)


def fetch_all(conn: Connection) -> list[Todo]:
    """Every stored todo. No ORDER BY: callers must not rely on insertion order."""
    with translate_errors("list todos"):
        rows = todo_repo.list_all(conn)
    return [Todo.from_row(r) for r in rows]


class TodoClient:
    """One open connection plus the todo operations over it."""

    def __init__(self, conn: Connection):
        self.conn = conn

    @classmethod
    def build(cls, location: str) -> "TodoClient":
        conn = open_connection(location)
        try:
            initialize_schema(conn)
        except Exception:
            conn.close()
            raise
        return cls(conn)

    def add(self, todo: Todo) -> Todo:
        return insert(self.conn, todo)

    def get_todo_by_id(self, todo_id: int) -> Todo:
        return fetch_by_id(self.conn, todo_id)

    def get_all_todos(self) -> list[Todo]:
        return fetch_all(self.conn)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "TodoClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
