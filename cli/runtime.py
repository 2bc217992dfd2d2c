"""Runtime boot helpers for the KeepPrompt CLI.

Updates:
  v0.1.1 - 2026-10-11 - Route queued notifications to the CLI logger.
  v0.1.0 - 2026-09-30 - Extract logging configuration helpers.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING

from core.notifications import NotificationLevel

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core.notifications import Notification, NotificationQueue, NotificationSubscription

_LEVELS = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


def setup_logging(logging_conf_path: Path | None) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or Path("config/logging.conf")
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (OSError, ValueError, KeyError, RuntimeError):  # pragma: no cover - fallback
            logging.getLogger("keepprompt.main").warning(
                "Ignoring unusable logging configuration at %s", path
            )
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def log_notifications(
    queue: NotificationQueue,
    logger: logging.Logger,
) -> NotificationSubscription:
    """Log each newly posted notification through *logger*."""
    seen: set[str] = set()

    def _on_change(entries: tuple[Notification, ...]) -> None:
        for entry in entries:
            if entry.id in seen:
                continue
            seen.add(entry.id)
            logger.log(_LEVELS.get(entry.level, logging.INFO), entry.message)

    return queue.subscribe(_on_change)


__all__ = ["log_notifications", "setup_logging"]
