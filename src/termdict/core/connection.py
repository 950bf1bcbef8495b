"""Store connection — open the dictionary's SQLite file read-only.

The dictionary never writes. ``open_store()`` opens the file through a
``mode=ro`` URI so no statement issued by this package can mutate it, and
wraps the raw ``sqlite3.Connection`` in :class:`SqliteStore`, which
satisfies the :class:`Connection` protocol used by the schema inferencer
and the repository.

Usage
-----
::

    from termdict.core.connection import open_store

    store, info = open_store("database.db")
    store.execute("SELECT COUNT(*) AS c FROM \"words\"")
    print(store.fetchone()["c"])
    store.close()

Design
------
``open_store()`` returns ``(store, StoreInfo)``; ``StoreInfo`` carries the
resolved path for startup diagnostics.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from termdict.core.errors import MissingConfigError, RepositoryError
from termdict.core.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class Connection(Protocol):
    """Minimal synchronous, read-only connection interface.

    Any object with this shape works: :class:`SqliteStore`, or a test double.
    """

    def execute(self, sql: str, params: tuple = ()) -> Any:
        """Execute a single statement."""
        ...

    def fetchone(self) -> Any:
        """Fetch one row from the last result set."""
        ...

    def fetchall(self) -> list[Any]:
        """Fetch all rows from the last result set."""
        ...

    def close(self) -> None:
        """Release the connection."""
        ...


@dataclass(frozen=True)
class StoreInfo:
    """Metadata about an opened store."""

    url: str
    """The path as configured."""

    resolved_path: str
    """Absolute path of the SQLite file."""

    read_only: bool = True


class SqliteStore:
    """Adapter: ``sqlite3.Connection`` → ``Connection`` protocol.

    Each ``execute`` opens a fresh cursor and returns it; ``fetchone`` /
    ``fetchall`` read from the most recent one. Callers that share the store
    across threads should read from the returned cursor.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._conn.row_factory = sqlite3.Row
        self._cursor: sqlite3.Cursor | None = None

    def execute(self, sql: str, params: tuple = ()) -> Any:
        self._cursor = self._conn.execute(sql, params)
        return self._cursor

    def fetchone(self) -> Any:
        return self._cursor.fetchone() if self._cursor else None

    def fetchall(self) -> list:
        return self._cursor.fetchall() if self._cursor else []

    def close(self) -> None:
        self._conn.close()

    @property
    def raw(self) -> sqlite3.Connection:
        """Access the underlying ``sqlite3.Connection``."""
        return self._conn

    def __repr__(self) -> str:
        return f"SqliteStore({self._conn!r})"


def quote_ident(name: str) -> str:
    """Quote an SQL identifier, doubling any embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


def open_store(path: str | Path) -> tuple[SqliteStore, StoreInfo]:
    """Open the dictionary file read-only.

    Raises:
        MissingConfigError: the file does not exist.
        RepositoryError: SQLite could not open it.
    """
    db_path = Path(path)
    if not db_path.is_file():
        raise MissingConfigError("db_path", f"Database file not found at: {db_path}")

    resolved = db_path.resolve()
    try:
        raw = sqlite3.connect(
            f"{resolved.as_uri()}?mode=ro",
            uri=True,
            check_same_thread=False,
        )
    except sqlite3.Error as exc:
        raise RepositoryError(f"Failed to open database: {exc}", cause=exc) from exc

    logger.info("store_opened", path=str(resolved))
    return SqliteStore(raw), StoreInfo(url=str(path), resolved_path=str(resolved))


__all__ = [
    "Connection",
    "SqliteStore",
    "StoreInfo",
    "open_store",
    "quote_ident",
]
