"""Tests for schedulers and the debouncer."""

from __future__ import annotations

import asyncio
import threading

import pytest

from core.scheduling import AsyncioScheduler, Debouncer, ThreadingScheduler


def test_debouncer_runs_once_after_last_trigger(scheduler) -> None:
    calls: list[float] = []
    debouncer = Debouncer(scheduler, 0.3, lambda: calls.append(scheduler.now))

    debouncer.trigger()
    scheduler.advance(0.2)
    debouncer.trigger()
    scheduler.advance(0.2)
    assert calls == []
    assert debouncer.pending

    scheduler.advance(0.2)

    assert calls == [pytest.approx(0.5)]
    assert not debouncer.pending


def test_debouncer_ignores_stale_timer_callbacks(scheduler) -> None:
    calls: list[int] = []
    debouncer = Debouncer(scheduler, 0.3, lambda: calls.append(1))

    debouncer.trigger()
    stale = scheduler.timers[0]
    debouncer.trigger()
    stale.callback()

    assert calls == []
    scheduler.advance(0.3)
    assert calls == [1]


def test_debouncer_cancel_and_flush(scheduler) -> None:
    calls: list[int] = []
    debouncer = Debouncer(scheduler, 0.3, lambda: calls.append(1))

    assert debouncer.cancel() is False
    debouncer.trigger()
    assert debouncer.cancel() is True
    scheduler.advance(1)
    assert calls == []

    debouncer.trigger()
    assert debouncer.flush() is True
    scheduler.advance(1)
    assert calls == [1]


def test_debouncer_rejects_negative_delay(scheduler) -> None:
    with pytest.raises(ValueError):
        Debouncer(scheduler, -1, lambda: None)


def test_threading_scheduler_runs_callback() -> None:
    fired = threading.Event()

    ThreadingScheduler().call_later(0.01, fired.set)

    assert fired.wait(2)


def test_threading_scheduler_cancel_prevents_callback() -> None:
    fired = threading.Event()

    handle = ThreadingScheduler().call_later(0.2, fired.set)
    handle.cancel()

    assert not fired.wait(0.4)


def test_asyncio_scheduler_uses_running_loop() -> None:
    async def _run() -> list[str]:
        events: list[str] = []
        scheduler = AsyncioScheduler()
        debouncer = Debouncer(scheduler, 0.01, lambda: events.append("fired"))
        debouncer.trigger()
        debouncer.trigger()
        await asyncio.sleep(0.05)
        return events

    assert asyncio.run(_run()) == ["fired"]
