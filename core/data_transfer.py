"""Versioned JSON export and import of prompts, categories, and settings.

An import is parsed and checked in full before anything is written. Each
section present in the payload then overwrites its stored blob; if a backend
write fails part-way, the sections already written are restored from the raw
values captured beforehand, so a failed import never leaves a partial update.

Updates:
  v0.3.0 - 2026-10-09 - Reject payloads whose major version is not 1.
  v0.2.0 - 2026-10-02 - Restore previously stored blobs when an import write fails.
  v0.1.0 - 2026-09-24 - Initial export/import with the 1.0 document layout.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from models.prompt_model import format_timestamp, utc_now

from .exceptions import ImportFormatError, KeepPromptError, StorageError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from .categories import CategoryStore
    from .preferences import SettingsStore
    from .record_store import PromptStore
    from .storage import StorageBackend, StorageKeys

logger = logging.getLogger("keepprompt.data_transfer")

EXPORT_VERSION = "1.0"
SUPPORTED_MAJOR_VERSION = 1


@dataclass(slots=True)
class ImportPayload:
    """Validated sections of an import document; ``None`` means "not present"."""

    prompts: list[dict[str, Any]] | None = None
    categories: list[dict[str, Any]] | None = None
    settings: dict[str, Any] | None = None
    version: str | None = None


@dataclass(slots=True, frozen=True)
class ImportSummary:
    """Counts of what an import replaced."""

    prompts: int | None
    categories: int | None
    settings: bool
    version: str | None


def default_backup_filename(now: datetime | None = None) -> str:
    """Return ``keepprompt-backup-YYYY-MM-DD.json`` for *now*."""
    stamp = (now or utc_now()).date().isoformat()
    return f"keepprompt-backup-{stamp}.json"


def _check_version(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    major_text = text.split(".", 1)[0]
    try:
        major = int(major_text)
    except ValueError as exc:
        raise ImportFormatError(f"Unrecognised export version {text!r}") from exc
    if major != SUPPORTED_MAJOR_VERSION:
        raise ImportFormatError(
            f"Unsupported export version {text!r}; expected {SUPPORTED_MAJOR_VERSION}.x"
        )
    return text


def _object_list(data: Mapping[str, Any], name: str) -> list[dict[str, Any]] | None:
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ImportFormatError(f"'{name}' must be an array")
    records: list[dict[str, Any]] = []
    seen: set[str] = set()
    for index, entry in enumerate(value):
        if not isinstance(entry, Mapping):
            raise ImportFormatError(f"'{name}[{index}]' must be an object")
        identifier = entry.get("id")
        if identifier is not None and identifier != "":
            key = str(identifier)
            if key in seen:
                raise ImportFormatError(f"Duplicate id {key!r} in '{name}'")
            seen.add(key)
        records.append({str(k): v for k, v in entry.items()})
    return records


def parse_import_payload(payload: str | bytes | Mapping[str, Any]) -> ImportPayload:
    """Decode and structurally check an export document."""
    if isinstance(payload, Mapping):
        data: Any = payload
    else:
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as exc:
            raise ImportFormatError("Import payload is not valid JSON") from exc
    if not isinstance(data, Mapping):
        raise ImportFormatError("Import payload must be a JSON object")

    version = _check_version(data.get("version"))
    settings = data.get("settings")
    if settings is not None and not isinstance(settings, Mapping):
        raise ImportFormatError("'settings' must be an object")
    return ImportPayload(
        prompts=_object_list(data, "prompts"),
        categories=_object_list(data, "categories"),
        settings=None if settings is None else {str(k): v for k, v in settings.items()},
        version=version,
    )


class DataTransfer:
    """Export, import, and wipe the whole KeepPrompt dataset."""

    def __init__(
        self,
        backend: StorageBackend,
        keys: StorageKeys,
        *,
        prompts: PromptStore,
        categories: CategoryStore,
        settings: SettingsStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._backend = backend
        self._keys = keys
        self._prompts = prompts
        self._categories = categories
        self._settings = settings
        self._clock = clock

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def build_export(self) -> dict[str, Any]:
        """Return the export document as a dictionary.

        Raises :class:`StorageReadError` when the stored prompts are corrupt so a
        backup never silently comes out empty.
        """
        return {
            "prompts": [prompt.to_record() for prompt in self._prompts.load()],
            "categories": [category.to_record() for category in self._categories.get_all()],
            "settings": self._settings.get().to_record(),
            "exportDate": format_timestamp(self._clock()),
            "version": EXPORT_VERSION,
        }

    def export_data(self) -> str:
        """Return the export document as indented JSON text."""
        return json.dumps(self.build_export(), indent=2, ensure_ascii=False)

    def export_to_file(self, path: Path) -> Path:
        """Write the export to *path* (a directory receives the default file name)."""
        resolved = path.expanduser()
        if resolved.is_dir():
            resolved = resolved / default_backup_filename(self._clock())
        resolved.parent.mkdir(parents=True, exist_ok=True)
        resolved.write_text(self.export_data(), encoding="utf-8")
        logger.info("Exported data", extra={"path": str(resolved)})
        return resolved

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------
    def import_payload(self, payload: str | bytes | Mapping[str, Any]) -> ImportSummary:
        """Apply *payload*, raising on malformed input or storage failure."""
        parsed = parse_import_payload(payload)

        touched: list[str] = []
        if parsed.prompts is not None:
            touched.append(self._keys.prompts)
        if parsed.categories is not None:
            touched.append(self._keys.categories)
        if parsed.settings is not None:
            touched.append(self._keys.settings)
        previous = {key: self._backend.get(key) for key in touched}

        try:
            if parsed.prompts is not None:
                self._prompts.save_all(parsed.prompts)
            if parsed.categories is not None:
                self._categories.save_all(parsed.categories)
            if parsed.settings is not None:
                self._settings.save(parsed.settings)
        except StorageError:
            self._restore(previous)
            raise

        summary = ImportSummary(
            prompts=None if parsed.prompts is None else len(parsed.prompts),
            categories=None if parsed.categories is None else len(parsed.categories),
            settings=parsed.settings is not None,
            version=parsed.version,
        )
        logger.info(
            "Imported data",
            extra={
                "prompts": summary.prompts,
                "categories": summary.categories,
                "version": summary.version,
            },
        )
        return summary

    def import_data(self, payload: str | bytes | Mapping[str, Any]) -> bool:
        """Apply *payload*; return False, leaving storage untouched, on any failure."""
        try:
            self.import_payload(payload)
        except ImportFormatError as exc:
            logger.warning("Rejected import payload: %s", exc)
            return False
        except KeepPromptError as exc:
            logger.error("Import failed: %s", exc)
            return False
        return True

    def read_file(self, path: Path) -> str:
        """Return the text of an import file."""
        try:
            return path.expanduser().read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ImportFormatError(f"Unable to read {path}: {exc}") from exc

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------
    def clear_all(self) -> None:
        """Remove every stored KeepPrompt blob."""
        for key in self._keys.all():
            self._backend.remove(key)
        logger.info("Cleared all stored data")

    def _restore(self, previous: Mapping[str, str | None]) -> None:
        for key, raw in previous.items():
            try:
                if raw is None:
                    self._backend.remove(key)
                else:
                    self._backend.set(key, raw)
            except StorageError:
                logger.exception("Failed to restore %s after an aborted import", key)


__all__ = [
    "EXPORT_VERSION",
    "SUPPORTED_MAJOR_VERSION",
    "DataTransfer",
    "ImportPayload",
    "ImportSummary",
    "default_backup_filename",
    "parse_import_payload",
]
