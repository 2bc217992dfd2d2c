"""Pytest configuration for shared test fixtures.

Updates:
  v0.2.0 - 2026-10-05 - Add manual scheduler and fixed clock fixtures.
  v0.1.0 - 2026-09-14 - Isolate configuration lookups from the developer environment.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest
from pytest import MonkeyPatch

from core.notifications import NotificationQueue
from core.storage import InMemoryStorage


@dataclass
class FakeTimer:
    """Timer handle recorded by :class:`FakeScheduler`."""

    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeScheduler:
    """Deterministic scheduler driven by :meth:`advance`."""

    now: float = 0.0
    timers: list[FakeTimer] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def advance(self, seconds: float) -> None:
        """Move time forward and fire every timer that became due, in order."""
        target = self.now + seconds
        while True:
            due = sorted(
                (timer for timer in self.active if timer.due <= target),
                key=lambda timer: timer.due,
            )
            if not due:
                break
            timer = due[0]
            timer.cancelled = True
            self.now = timer.due
            timer.callback()
        self.now = target


class FixedClock:
    """Callable clock that moves only when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def tick(self, **delta: float) -> datetime:
        self.current = self.current + timedelta(**delta)
        return self.current


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep KEEPPROMPT_* variables and config/config.json out of test runs."""
    for name in (
        "KEEPPROMPT_CONFIG_JSON",
        "KEEPPROMPT_STORAGE_BACKEND",
        "KEEPPROMPT_DB_PATH",
        "KEEPPROMPT_STORAGE_PREFIX",
        "KEEPPROMPT_SEARCH_DEBOUNCE_MS",
        "KEEPPROMPT_TOAST_DURATION_MS",
        "KEEPPROMPT_TOAST_GRACE_MS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 3, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def backend() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def notifications(scheduler: FakeScheduler) -> Iterator[NotificationQueue]:
    queue = NotificationQueue(scheduler)
    yield queue
    queue.clear()
