"""
rtd - personal todo CLI (SQLite)

Commands:
  new [title]         Create a todo; prompts for the title if omitted, always for the description
  get --id <id>       Print one todo
  get [--all]         Print every todo

Notes:
- The database lives in the per-user data directory unless --db, RTD_DB_PATH
  or the config file's db_path says otherwise. --db :memory: keeps nothing.
- Failing to open the database is fatal (exit 1); a missing id is only reported.
"""
from __future__ import annotations

import argparse
import logging
import sys

from .config import load_settings
from .domain.todo import Todo, format_todo
from .errors import NotFound, StorageError, UniqueConstraintViolation
from .services.todo_svc import TodoClient

logger = logging.getLogger(__name__)


# ---------------- helpers ----------------

def _prompt(label: str) -> str:
    try:
        return input(label).strip()
    except EOFError:
        return ""


def _fail(msg: str) -> int:
    print(f"error: {msg}", file=sys.stderr)
    return 1


def _setup_logging(verbose: bool, level_name: str) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ---------------- Commands ----------------

def cmd_new(args, client: TodoClient) -> int:
    title = args.title.strip() if args.title else _prompt("Todo title: ")
    description = _prompt("Todo description: ")
    try:
        todo = client.add(Todo.new(title, description, False))
    except ValueError:
        return _fail("title required")
    except UniqueConstraintViolation:
        logger.info(f"duplicate title rejected: {title}")
        return _fail(f'a todo titled "{title}" already exists')
    print(f'Created new todo - "{todo.title}"')
    return 0


def cmd_get(args, client: TodoClient) -> int:
    if args.id is not None:
        try:
            todo = client.get_todo_by_id(args.id)
        except NotFound:
            print(f"Could not find any todo with id: {args.id}")
            return 0
        print(format_todo(todo))
        return 0

    todos = client.get_all_todos()
    if not todos:
        print("No todos yet.")
    for todo in todos:
        print(format_todo(todo))
    return 0


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rtd", description="Personal todo CLI (SQLite)")
    parser.add_argument("--db", default=None, help="database file (':memory:' for a throwaway DB)")
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers()

    p_new = sub.add_parser("new", help="create a new todo item")
    p_new.add_argument("title", nargs="?", default=None, help="title of the todo to create")
    p_new.set_defaults(func=cmd_new)

    p_get = sub.add_parser("get", help="get todos from the database")
    which = p_get.add_mutually_exclusive_group()
    which.add_argument("--id", type=int, default=None, help="id of the todo to retrieve")
    which.add_argument("--all", action="store_true", help="get all of the todos (default)")
    p_get.set_defaults(func=cmd_get)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    settings = load_settings(args.db, args.config)
    _setup_logging(args.verbose, settings.log_level)

    try:
        client = TodoClient.build(settings.db_path)
    except StorageError as e:
        logger.error(f"could not open todo database at {settings.db_path}: {e}")
        return _fail(f"could not open todo database: {e}")

    with client:
        try:
            return args.func(args, client)
        except StorageError as e:
            logger.error(f"{args.func.__name__} failed: {e}")
            return _fail(str(e))


if __name__ == "__main__":
    sys.exit(main())
