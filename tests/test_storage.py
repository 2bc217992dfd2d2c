"""Tests for the key/value storage backends."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.exceptions import StorageReadError, StorageWriteError
from core.storage import (
    InMemoryStorage,
    SQLiteStorage,
    StorageBackend,
    StorageKeys,
    read_json,
    write_json,
)


def test_in_memory_storage_get_set_remove() -> None:
    storage = InMemoryStorage({"a": "1"})

    assert storage.get("a") == "1"
    storage.set("a", "2")
    storage.set("b", "3")
    storage.remove("a")
    storage.remove("missing")

    assert storage.snapshot() == {"b": "3"}
    assert isinstance(storage, StorageBackend)


def test_in_memory_quota_rejects_oversized_writes() -> None:
    storage = InMemoryStorage(quota_bytes=10)
    storage.set("a", "12345")

    with pytest.raises(StorageWriteError):
        storage.set("b", "123456")

    storage.set("a", "1234567890")
    assert storage.get("b") is None


def test_sqlite_storage_persists_between_instances(tmp_path: Path) -> None:
    db_path = tmp_path / "nested" / "keepprompt.db"
    first = SQLiteStorage(db_path)
    first.set("keepprompt_prompts", "[]")
    first.set("keepprompt_prompts", '[{"id": "1"}]')

    second = SQLiteStorage(db_path)

    assert second.get("keepprompt_prompts") == '[{"id": "1"}]'
    second.remove("keepprompt_prompts")
    assert first.get("keepprompt_prompts") is None
    assert db_path.exists()


def test_sqlite_storage_uses_wal_journal(tmp_path: Path) -> None:
    from core.storage.sqlite import connect

    storage = SQLiteStorage(tmp_path / "wal.db")
    conn = connect(storage.db_path)
    try:
        mode = conn.execute("PRAGMA journal_mode;").fetchone()[0]
    finally:
        conn.close()

    assert str(mode).lower() == "wal"


def test_storage_keys_apply_prefix() -> None:
    keys = StorageKeys("test_")

    assert keys.prompts == "test_prompts"
    assert keys.all() == ("test_prompts", "test_categories", "test_settings", "test_templates")


def test_read_json_raises_on_corrupt_payload() -> None:
    storage = InMemoryStorage({"k": "{not json"})

    with pytest.raises(StorageReadError):
        read_json(storage, "k")
    assert read_json(storage, "missing") is None


def test_write_json_rejects_unserialisable_values() -> None:
    storage = InMemoryStorage()

    with pytest.raises(StorageWriteError):
        write_json(storage, "k", {"value": object()})

    write_json(storage, "k", {"title": "héllo"})
    assert storage.get("k") == '{"title": "héllo"}'
