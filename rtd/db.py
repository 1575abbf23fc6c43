from __future__ import annotations

# rtd/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from .config import MEMORY_LOCATION, load_settings
from .errors import StorageError

logger = logging.getLogger(__name__)


def open_connection(location: str) -> sqlite3.Connection:
    """
    Open the SQLite database at `location`.
    Only the exact string ":memory:" gives a transient in-memory DB; anything
    else (":memory" included) is treated as a file path. The parent directory
    of a file is created when missing.
    """
    if location != MEMORY_LOCATION:
        dirn = os.path.dirname(location)
        if dirn:
            try:
                os.makedirs(dirn, exist_ok=True)
            except OSError as e:
                raise StorageError(f"cannot create directory for {location!r}: {e}") from e
    try:
        conn = sqlite3.connect(
            location,
            detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
            isolation_level=None,
        )
    except (sqlite3.Error, ValueError) as e:
        raise StorageError(f"cannot open database {location!r}: {e}") from e
    conn.row_factory = sqlite3.Row
    logger.debug(f"opened database {location}")
    return conn


@contextmanager
def get_conn(location: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Connection scoped to a with-block. Uses the explicit location if given,
    otherwise the configured path from load_settings().
    """
    path = location or load_settings().db_path
    conn = open_connection(path)
    try:
        yield conn
    finally:
        conn.close()
