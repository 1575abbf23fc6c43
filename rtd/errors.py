from __future__ import annotations

# rtd/errors.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator


class StorageError(Exception):
    """The database could not be opened, or a statement against it failed."""


class UniqueConstraintViolation(StorageError):
    """Insert attempted with a title that already exists."""


class NotFound(StorageError):
    def __init__(self, todo_id: int):
        super().__init__(f"no todo with id {todo_id}")
        self.todo_id = todo_id


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """
    Re-raise sqlite3 errors from the wrapped block as StorageError subclasses.
    UNIQUE failures become UniqueConstraintViolation; everything else is StorageError.
    """
    try:
        yield
    except sqlite3.IntegrityError as exc:
        if "UNIQUE" in str(exc).upper():
            raise UniqueConstraintViolation(f"{action}: {exc}") from exc
        raise StorageError(f"{action}: {exc}") from exc
    except sqlite3.Error as exc:
        raise StorageError(f"{action}: {exc}") from exc
