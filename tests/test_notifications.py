"""Tests for the auto-expiring notification queue."""

from __future__ import annotations

from core.notifications import EXIT_GRACE_MS, NotificationLevel, NotificationQueue


def test_post_appends_and_publishes_snapshot(scheduler) -> None:
    queue = NotificationQueue(scheduler)
    events = []
    queue.subscribe(events.append)

    first = queue.success("Saved")
    queue.error("Broken")

    assert [entry.message for entry in queue.entries()] == ["Saved", "Broken"]
    assert len(events) == 2
    assert [entry.id for entry in events[0]] == [first]
    assert events[1][1].level is NotificationLevel.ERROR


def test_notifications_expire_after_duration_and_grace(scheduler) -> None:
    queue = NotificationQueue(scheduler)
    queue.info("Short", duration_ms=1000)
    queue.info("Default")

    scheduler.advance((1000 + EXIT_GRACE_MS) / 1000 - 0.01)
    assert len(queue.entries()) == 2

    scheduler.advance(0.02)
    assert [entry.message for entry in queue.entries()] == ["Default"]

    scheduler.advance(3)
    assert queue.entries() == ()


def test_zero_duration_is_sticky(scheduler) -> None:
    queue = NotificationQueue(scheduler)
    queue.warning("Sticky", duration_ms=0)

    scheduler.advance(60)

    assert [entry.message for entry in queue.entries()] == ["Sticky"]
    assert scheduler.timers == []


def test_dismiss_cancels_timer(scheduler) -> None:
    queue = NotificationQueue(scheduler)
    notification_id = queue.info("Bye")

    assert queue.dismiss(notification_id) is True
    assert queue.dismiss(notification_id) is False
    assert scheduler.active == []


def test_subscription_can_be_closed(scheduler) -> None:
    queue = NotificationQueue(scheduler)
    events = []
    subscription = queue.subscribe(events.append)
    assert subscription.active
    subscription.close()
    subscription.close()

    queue.info("Silent")

    assert not events
    assert not subscription.active


def test_subscription_context_stops_listening_on_exit(scheduler) -> None:
    queue = NotificationQueue(scheduler)
    events = []
    with queue.subscribe(events.append) as subscription:
        queue.info("Heard")
        assert subscription.active

    queue.info("Missed")

    assert [entry.message for entry in events[-1]] == ["Heard"]
    assert not subscription.active


def test_clear_removes_everything(scheduler) -> None:
    queue = NotificationQueue(scheduler)
    events = []
    with queue.subscribe(events.append):
        queue.info("One")
        queue.info("Two")
        queue.clear()

    assert queue.entries() == ()
    assert events[-1] == ()
    assert scheduler.active == []


def test_to_dict_uses_wire_names(scheduler) -> None:
    queue = NotificationQueue(scheduler, default_duration_ms=1500)
    queue.error("Nope")

    payload = queue.entries()[0].to_dict()

    assert payload["type"] == "error"
    assert payload["duration"] == 1500
    assert payload["message"] == "Nope"
