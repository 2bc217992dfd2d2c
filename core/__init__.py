"""Core service layer for KeepPrompt.

Updates:
  v0.3.0 - 2026-10-10 - Export build_workspace factory for shared bootstrap.
  v0.2.0 - 2026-10-02 - Export data transfer and query pipeline APIs.
  v0.1.0 - 2026-09-16 - Surface PromptStore and storage backends.
"""

from .categories import CategoryStore, default_categories
from .data_transfer import (
    EXPORT_VERSION,
    DataTransfer,
    ImportSummary,
    default_backup_filename,
    parse_import_payload,
)
from .exceptions import (
    CategoryError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    ImportFormatError,
    KeepPromptError,
    PromptValidationError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from .factory import build_storage, build_workspace
from .notifications import Notification, NotificationLevel, NotificationQueue
from .preferences import SettingsStore
from .query import (
    ALL_CATEGORIES,
    QueryPipeline,
    QueryState,
    SortKey,
    SortOrder,
    apply_query,
)
from .record_store import PromptStore, generate_id
from .scheduling import AsyncioScheduler, Debouncer, Scheduler, ThreadingScheduler
from .storage import InMemoryStorage, SQLiteStorage, StorageBackend, StorageKeys
from .validation import ValidationResult, validate_prompt
from .workspace import PromptWorkspace

__all__ = [
    "ALL_CATEGORIES",
    "EXPORT_VERSION",
    "AsyncioScheduler",
    "CategoryError",
    "CategoryNotFoundError",
    "CategoryStore",
    "DataTransfer",
    "Debouncer",
    "DuplicateCategoryError",
    "ImportFormatError",
    "ImportSummary",
    "InMemoryStorage",
    "KeepPromptError",
    "Notification",
    "NotificationLevel",
    "NotificationQueue",
    "PromptStore",
    "PromptValidationError",
    "PromptWorkspace",
    "QueryPipeline",
    "QueryState",
    "SQLiteStorage",
    "Scheduler",
    "SettingsStore",
    "SortKey",
    "SortOrder",
    "StorageBackend",
    "StorageError",
    "StorageKeys",
    "StorageReadError",
    "StorageWriteError",
    "ThreadingScheduler",
    "ValidationResult",
    "apply_query",
    "build_storage",
    "build_workspace",
    "default_backup_filename",
    "default_categories",
    "generate_id",
    "parse_import_payload",
    "validate_prompt",
]
