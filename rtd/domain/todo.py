"""Todo record: the only entity rtd stores.

`id` stays None until the record has been inserted; the database assigns it.
Equality follows the stored identity (id, title, description). Completion is
left out of `==`; use `matches(..., include_complete=True)` when it matters.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from sqlite3 import Connection, Row
from typing import Optional


@dataclass(frozen=True)
class Todo:
    title: str
    description: str = ""
    complete: bool = field(default=False, compare=False)
    id: Optional[int] = None

    @classmethod
    def new(cls, title: str, description: str = "", complete: bool = False) -> "Todo":
        return cls(title=title, description=description, complete=complete)

    @classmethod
    def from_row(cls, row: Row) -> "Todo":
        return cls(
            id=int(row["id"]),
            title=row["title"],
            description=row["description"] or "",
            complete=bool(row["complete"]),
        )

    def with_id(self, todo_id: int) -> "Todo":
        return replace(self, id=todo_id)

    def matches(self, other: "Todo", include_complete: bool = False) -> bool:
        if self != other:
            return False
        return not include_complete or self.complete == other.complete

    def save(self, conn: Connection) -> "Todo":
        """Insert this todo and return the stored copy (with its id)."""
        from ..services.todo_svc import insert  # local import to avoid cycle
        return insert(conn, self)


def format_todo(todo: Todo) -> str:
    return (
        f"{todo.title} (id:{todo.id}, complete:{str(todo.complete).lower()}):\n"
        f"    Description: {json.dumps(todo.description, ensure_ascii=False)}"
    )
