"""Key/value storage backends.

Updates:
  v0.1.0 - 2026-09-14 - Package the backend protocol with memory and SQLite backends.
"""

from __future__ import annotations

from .base import DEFAULT_KEY_PREFIX, StorageBackend, StorageKeys, read_json, write_json
from .memory import InMemoryStorage
from .sqlite import SQLiteStorage

__all__ = [
    "DEFAULT_KEY_PREFIX",
    "InMemoryStorage",
    "SQLiteStorage",
    "StorageBackend",
    "StorageKeys",
    "read_json",
    "write_json",
]
