"""Printable summaries for KeepPrompt configuration.

Updates:
  v0.1.0 - 2026-10-01 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

import os

from config import KeepPromptSettings

from .utils import describe_path


def print_settings_summary(settings: KeepPromptSettings) -> None:
    """Emit a readable summary of the resolved configuration."""
    config_path = os.getenv("KEEPPROMPT_CONFIG_JSON") or "config/config.json"
    backend = settings.storage_backend
    if backend == "sqlite":
        db_description = describe_path(
            settings.db_path,
            expect_directory=False,
            allow_missing_file=True,
        )
    else:
        db_description = "not used (memory backend)"

    lines = [
        "KeepPrompt configuration summary",
        "--------------------------------",
        f"Config file: {describe_path(config_path, expect_directory=False)}",
        f"Storage backend: {backend}",
        f"Database path: {db_description}",
        f"Storage key prefix: {settings.storage_prefix or '(none)'}",
        f"Search debounce: {settings.search_debounce_ms} ms",
        f"Notification duration: {settings.toast_duration_ms} ms "
        f"(+{settings.toast_grace_ms} ms exit grace)",
    ]
    print("\n".join(lines))


__all__ = ["print_settings_summary"]
