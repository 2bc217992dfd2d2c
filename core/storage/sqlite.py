"""SQLite-backed key/value storage.

Updates:
  v0.1.0 - 2026-09-14 - Persist blobs in a single kv_store table.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import TYPE_CHECKING

from ..exceptions import StorageReadError, StorageWriteError
from .base import logger

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


def ensure_directory(path: Path) -> None:
    """Ensure the directory for the SQLite database exists."""
    path.parent.mkdir(parents=True, exist_ok=True)


def connect(db_path: Path) -> sqlite3.Connection:
    """Return a configured SQLite connection."""
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode = WAL;")
    conn.execute("PRAGMA synchronous = NORMAL;")
    return conn


class SQLiteStorage:
    """Durable key/value store kept in one SQLite table."""

    def __init__(self, db_path: Path) -> None:
        """Create the database file and schema when missing."""
        self._db_path = db_path
        try:
            ensure_directory(db_path)
            with self._connection() as conn:
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS kv_store ("
                    "key TEXT PRIMARY KEY, value TEXT NOT NULL);"
                )
        except (OSError, sqlite3.Error) as exc:
            raise StorageWriteError(f"Unable to initialise storage at {db_path}") from exc
        logger.debug("SQLite storage ready", extra={"db_path": str(db_path)})

    @property
    def db_path(self) -> Path:
        return self._db_path

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = connect(self._db_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def get(self, key: str) -> str | None:
        try:
            with self._connection() as conn:
                row = conn.execute("SELECT value FROM kv_store WHERE key = ?;", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageReadError(f"Failed to read {key!r}") from exc
        return None if row is None else str(row["value"])

    def set(self, key: str, value: str) -> None:
        try:
            with self._connection() as conn:
                conn.execute(
                    "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value;",
                    (key, value),
                )
        except sqlite3.Error as exc:
            raise StorageWriteError(f"Failed to write {key!r}") from exc

    def remove(self, key: str) -> None:
        try:
            with self._connection() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?;", (key,))
        except sqlite3.Error as exc:
            raise StorageWriteError(f"Failed to remove {key!r}") from exc


__all__ = ["SQLiteStorage", "connect", "ensure_directory"]
