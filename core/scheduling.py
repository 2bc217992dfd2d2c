"""Cancelable timers and a debouncer for deferred recomputation.

Two schedulers are provided: :class:`AsyncioScheduler` runs callbacks on an
asyncio event loop (cooperative, single-threaded), :class:`ThreadingScheduler`
uses :class:`threading.Timer` for synchronous hosts such as the CLI.

Updates:
  v0.2.0 - 2026-10-05 - Guard debouncer against stale timer callbacks.
  v0.1.0 - 2026-09-23 - Introduce scheduler protocol and debouncer.
"""

from __future__ import annotations

import asyncio
import functools
import threading
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable


class TimerHandle(Protocol):
    """Handle returned by :meth:`Scheduler.call_later`."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Anything able to run a callback once after *delay* seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class AsyncioScheduler:
    """Schedule callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Use *loop* or, lazily, the running loop of the caller."""
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(delay, 0.0), callback)


class ThreadingScheduler:
    """Schedule callbacks on daemon :class:`threading.Timer` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(max(delay, 0.0), callback)
        timer.daemon = True
        timer.start()
        return timer


class Debouncer:
    """Collapse bursts of :meth:`trigger` calls into a single callback.

    Each trigger cancels the pending timer and schedules a new one, so the
    callback runs once, *delay* seconds after the last trigger.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        delay: float,
        callback: Callable[[], None],
    ) -> None:
        """Store the scheduler, quiet period (seconds), and callback."""
        if delay < 0:
            raise ValueError("delay must not be negative")
        self._scheduler = scheduler
        self._delay = delay
        self._callback = callback
        self._lock = threading.RLock()
        self._pending: TimerHandle | None = None
        self._generation = 0

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """Return True while a callback is scheduled and not yet run."""
        with self._lock:
            return self._pending is not None

    def trigger(self) -> None:
        """(Re)start the quiet period."""
        with self._lock:
            self._cancel_pending()
            self._generation += 1
            fire = functools.partial(self._fire, self._generation)
            self._pending = self._scheduler.call_later(self._delay, fire)

    def cancel(self) -> bool:
        """Drop the pending callback; return True when one was scheduled."""
        with self._lock:
            was_pending = self._pending is not None
            self._cancel_pending()
            self._generation += 1
            return was_pending

    def flush(self) -> bool:
        """Run the pending callback now; return True when one was scheduled."""
        with self._lock:
            if self._pending is None:
                return False
            self._cancel_pending()
            self._generation += 1
        self._callback()
        return True

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._pending is None:
                # Superseded by a later trigger or cancelled after the timer started.
                return
            self._pending = None
        self._callback()


__all__ = [
    "AsyncioScheduler",
    "Debouncer",
    "Scheduler",
    "ThreadingScheduler",
    "TimerHandle",
]
