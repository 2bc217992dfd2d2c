"""Ephemeral, auto-expiring status messages shown to the user.

Updates:
  v0.2.1 - 2026-10-19 - Subscriptions expose whether they are still listening.
  v0.2.0 - 2026-10-06 - Replace task tracking with an expiring toast queue.
  v0.1.1 - 2026-09-29 - Move Callable imports under TYPE_CHECKING per lint.
  v0.1.0 - 2026-09-23 - Introduce notification queue with subscriber callbacks.
"""
from __future__ import annotations

import functools
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from .scheduling import ThreadingScheduler

if TYPE_CHECKING:
    from collections.abc import Callable

    from .scheduling import Scheduler, TimerHandle

logger = logging.getLogger("keepprompt.notifications")

DEFAULT_DURATION_MS = 3000
EXIT_GRACE_MS = 300


class NotificationLevel(str, Enum):
    """Kinds of messages communicated to listeners."""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(slots=True)
class Notification:
    """Payload describing one queued message."""
    id: str
    message: str
    level: NotificationLevel
    duration_ms: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Return a serialisable representation of the notification."""
        return {
            "id": self.id,
            "message": self.message,
            "type": self.level.value,
            "duration": self.duration_ms,
            "timestamp": self.timestamp.isoformat(),
        }


class NotificationSubscription:
    """Listener registration returned by :meth:`NotificationQueue.subscribe`.

    Closing it stops snapshot delivery to the listener; closing twice is a no-op.
    Use it in a ``with`` block to listen only while a command runs.
    """

    def __init__(
        self,
        queue: NotificationQueue,
        callback: Callable[[tuple[Notification, ...]], None],
    ) -> None:
        self._queue: NotificationQueue | None = queue
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._queue is not None

    def close(self) -> None:
        """Stop delivering queue snapshots to the listener."""
        queue, self._queue = self._queue, None
        if queue is not None:
            queue.unsubscribe(self._callback)

    def __enter__(self) -> NotificationSubscription:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


class NotificationQueue:
    """In-memory list of status messages that expire on their own.

    A message posted with ``duration_ms > 0`` is removed ``duration_ms`` plus
    :data:`EXIT_GRACE_MS` milliseconds later. Subscribers receive the full
    snapshot of current entries after every change.
    """
    def __init__(
        self,
        scheduler: Scheduler | None = None,
        *,
        default_duration_ms: int = DEFAULT_DURATION_MS,
        grace_ms: int = EXIT_GRACE_MS,
    ) -> None:
        """Initialise the entry list, expiry timers, and subscriber registry."""
        self._scheduler = scheduler or ThreadingScheduler()
        self._default_duration_ms = default_duration_ms
        self._grace_ms = grace_ms
        self._entries: list[Notification] = []
        self._timers: dict[str, TimerHandle] = {}
        self._subscribers: list[Callable[[tuple[Notification, ...]], None]] = []
        self._lock = threading.RLock()

    def subscribe(
        self, callback: Callable[[tuple[Notification, ...]], None]
    ) -> NotificationSubscription:
        """Register *callback* to receive future snapshots."""
        with self._lock:
            self._subscribers.append(callback)
        return NotificationSubscription(self, callback)

    def unsubscribe(self, callback: Callable[[tuple[Notification, ...]], None]) -> None:
        """Remove a previously subscribed callback if present."""
        with self._lock:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

    def entries(self) -> tuple[Notification, ...]:
        """Return a snapshot of the queued notifications."""
        with self._lock:
            return tuple(self._entries)

    def post(
        self,
        message: str,
        level: NotificationLevel | str = NotificationLevel.SUCCESS,
        duration_ms: int | None = None,
    ) -> str:
        """Append a notification and return its id."""
        resolved_level = NotificationLevel(level)
        duration = self._default_duration_ms if duration_ms is None else int(duration_ms)
        notification = Notification(
            id=uuid.uuid4().hex,
            message=message,
            level=resolved_level,
            duration_ms=duration,
        )
        with self._lock:
            self._entries.append(notification)
            if duration > 0:
                delay = (duration + self._grace_ms) / 1000
                expire = functools.partial(self._expire, notification.id)
                self._timers[notification.id] = self._scheduler.call_later(delay, expire)

        logger.debug(
            "Notification posted",
            extra={"notification_id": notification.id, "level": resolved_level.value},
        )
        self._publish()
        return notification.id

    def success(self, message: str, duration_ms: int | None = None) -> str:
        return self.post(message, NotificationLevel.SUCCESS, duration_ms)

    def error(self, message: str, duration_ms: int | None = None) -> str:
        return self.post(message, NotificationLevel.ERROR, duration_ms)

    def warning(self, message: str, duration_ms: int | None = None) -> str:
        return self.post(message, NotificationLevel.WARNING, duration_ms)

    def info(self, message: str, duration_ms: int | None = None) -> str:
        return self.post(message, NotificationLevel.INFO, duration_ms)

    def dismiss(self, notification_id: str) -> bool:
        """Remove the entry immediately; return False when it is already gone."""
        with self._lock:
            timer = self._timers.pop(notification_id, None)
            if timer is not None:
                timer.cancel()
            remaining = [entry for entry in self._entries if entry.id != notification_id]
            removed = len(remaining) != len(self._entries)
            self._entries = remaining
        if removed:
            self._publish()
        return removed

    def clear(self) -> None:
        """Remove every entry and cancel all expiry timers."""
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
            had_entries = bool(self._entries)
            self._entries = []
        if had_entries:
            self._publish()

    def _expire(self, notification_id: str) -> None:
        with self._lock:
            self._timers.pop(notification_id, None)
        self.dismiss(notification_id)

    def _publish(self) -> None:
        with self._lock:
            snapshot = tuple(self._entries)
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(snapshot)
            except Exception:  # pragma: no cover - subscriber errors are logged
                logger.exception("Notification subscriber raised an exception")


__all__ = [
    "DEFAULT_DURATION_MS",
    "EXIT_GRACE_MS",
    "Notification",
    "NotificationLevel",
    "NotificationQueue",
    "NotificationSubscription",
]
