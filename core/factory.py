"""Factories for constructing a PromptWorkspace from validated settings.

Updates:
  v0.2.0 - 2026-10-10 - Pass notification timings and search debounce from settings.
  v0.1.0 - 2026-09-27 - Wire storage, stores, pipeline, and notifications in one builder.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.prompt_model import utc_now

from .categories import CategoryStore
from .data_transfer import DataTransfer
from .notifications import NotificationQueue
from .preferences import SettingsStore
from .query import QueryPipeline
from .record_store import PromptStore
from .scheduling import ThreadingScheduler
from .storage import InMemoryStorage, SQLiteStorage, StorageKeys
from .workspace import PromptWorkspace

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Callable
    from datetime import datetime

    from config import KeepPromptSettings

    from .scheduling import Scheduler
    from .storage import StorageBackend

factory_logger = logging.getLogger("keepprompt.factory")


def build_storage(settings: KeepPromptSettings) -> StorageBackend:
    """Return the key/value backend selected by *settings*."""
    if settings.storage_backend == "memory":
        factory_logger.info("Using volatile in-memory storage")
        return InMemoryStorage()
    factory_logger.debug("Using SQLite storage", extra={"db_path": str(settings.db_path)})
    return SQLiteStorage(settings.db_path)


def build_workspace(
    settings: KeepPromptSettings,
    *,
    scheduler: Scheduler | None = None,
    backend: StorageBackend | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> PromptWorkspace:
    """Return a PromptWorkspace wired to the configured storage backend.

    *scheduler* drives both the search debounce and notification expiry; the
    threading scheduler is used when none is supplied. Passing *backend* skips
    :func:`build_storage`, which tests use to inject an in-memory store.
    """
    resolved_scheduler = scheduler or ThreadingScheduler()
    resolved_backend = backend if backend is not None else build_storage(settings)
    keys = StorageKeys(settings.storage_prefix)
    notifications = NotificationQueue(
        resolved_scheduler,
        default_duration_ms=settings.toast_duration_ms,
        grace_ms=settings.toast_grace_ms,
    )
    store = PromptStore(resolved_backend, keys=keys, notifications=notifications, clock=clock)
    categories = CategoryStore(resolved_backend, keys=keys, notifications=notifications)
    preferences = SettingsStore(resolved_backend, keys=keys, notifications=notifications)
    transfer = DataTransfer(
        resolved_backend,
        keys,
        prompts=store,
        categories=categories,
        settings=preferences,
        clock=clock,
    )
    pipeline = QueryPipeline(resolved_scheduler, delay_ms=settings.search_debounce_ms)
    return PromptWorkspace(
        store=store,
        categories=categories,
        settings=preferences,
        transfer=transfer,
        pipeline=pipeline,
        notifications=notifications,
    )


__all__ = ["build_storage", "build_workspace"]
