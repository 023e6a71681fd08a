"""Tests for the reminder poller, driven by a fake clock and a fake scheduler."""
from datetime import datetime, timedelta
from typing import Callable, List, Tuple

from event_scheduler.models import Category, Event, EventStore
from event_scheduler.reminders import Reminder, ReminderPoller, due_reminders

NOW = datetime(2024, 3, 15, 9, 0)


def _store(*offsets_min: int) -> EventStore:
    store = EventStore()
    for i, m in enumerate(offsets_min):
        store.insert(Event(f"E{i}", NOW + timedelta(minutes=m), "Here", Category.OTHER))
    return store


class FakeScheduler:
    def __init__(self) -> None:
        self.calls: List[Tuple[int, Callable[[], None]]] = []

    def __call__(self, delay_ms: int, callback: Callable[[], None]) -> str:
        self.calls.append((delay_ms, callback))
        return f"after#{len(self.calls)}"

    def fire(self) -> None:
        _, callback = self.calls[-1]
        callback()


def test_window_bounds_are_strict() -> None:
    store = _store(-5, 0, 30, 60, 90)
    titles = [r.event.title for r in due_reminders(store.all(), NOW)]
    assert titles == ["E2"]


def test_check_notifies_once_per_event() -> None:
    seen: List[Reminder] = []
    poller = ReminderPoller(_store(30), seen.append, clock=lambda: NOW)
    poller.check()
    assert len(seen) == 1
    assert seen[0].message == "Upcoming Event Reminder:\nE0 at 09:30"


def test_repeated_firings_are_not_suppressed() -> None:
    seen: List[Reminder] = []
    poller = ReminderPoller(_store(30), seen.append, clock=lambda: NOW)
    poller.check()
    poller.check()
    assert [r.event.title for r in seen] == ["E0", "E0"]


def test_event_falls_out_of_window_once_started() -> None:
    seen: List[Reminder] = []
    poller = ReminderPoller(_store(30), seen.append)
    poller.check(NOW + timedelta(minutes=29))
    poller.check(NOW + timedelta(minutes=30))
    assert len(seen) == 1


def test_start_rearms_every_interval() -> None:
    sched = FakeScheduler()
    seen: List[Reminder] = []
    poller = ReminderPoller(_store(30), seen.append, clock=lambda: NOW)
    poller.start(sched)
    assert poller.running
    assert sched.calls[0][0] == 60_000
    assert seen == []

    sched.fire()
    sched.fire()
    assert len(seen) == 2
    assert len(sched.calls) == 3


def test_stop_makes_pending_firing_a_noop() -> None:
    sched = FakeScheduler()
    seen: List[Reminder] = []
    poller = ReminderPoller(_store(30), seen.append, clock=lambda: NOW)
    poller.start(sched)
    poller.stop()
    sched.fire()
    assert seen == []
    assert len(sched.calls) == 1


def test_failing_notify_keeps_poller_alive() -> None:
    def boom(_: Reminder) -> None:
        raise RuntimeError("dialog failed")

    sched = FakeScheduler()
    poller = ReminderPoller(_store(30), boom, clock=lambda: NOW, interval_seconds=5)
    poller.start(sched)
    sched.fire()
    assert len(sched.calls) == 2
    assert sched.calls[-1][0] == 5_000


def test_poller_sees_events_added_after_start() -> None:
    store = EventStore()
    seen: List[Reminder] = []
    poller = ReminderPoller(store, seen.append, clock=lambda: NOW)
    poller.check()
    store.insert(Event("Late add", NOW + timedelta(minutes=10), "Here", Category.WORK))
    poller.check()
    assert [r.event.title for r in seen] == ["Late add"]


def test_second_start_is_ignored() -> None:
    sched = FakeScheduler()
    seen: List[Reminder] = []
    poller = ReminderPoller(_store(30), seen.append, clock=lambda: NOW)
    poller.start(sched)
    poller.start(sched)
    assert len(sched.calls) == 1

    sched.fire()
    assert len(seen) == 1


def test_restart_drops_the_old_chain() -> None:
    sched = FakeScheduler()
    seen: List[Reminder] = []
    poller = ReminderPoller(_store(30), seen.append, clock=lambda: NOW)
    poller.start(sched)
    poller.stop()
    poller.start(sched)
    assert len(sched.calls) == 2

    # the firing armed before stop() is still queued; it must do nothing
    _, stale = sched.calls[0]
    stale()
    assert seen == []
    assert len(sched.calls) == 2

    sched.fire()
    assert len(seen) == 1
    assert len(sched.calls) == 3
