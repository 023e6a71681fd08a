"""Tests for the event store: insertion order and exact-time collisions."""
from datetime import datetime

import pytest

from event_scheduler.models import Category, Event, EventStore
from event_scheduler.results import DuplicateTimestamp, ValidationError


def _event(title: str, dt: datetime, category: Category = Category.MEETING) -> Event:
    return Event(title=title, date_time=dt, location="Room 1", category=category)


def test_insert_keeps_insertion_order() -> None:
    store = EventStore()
    later   = _event("Later",   datetime(2024, 3, 16, 9, 0))
    earlier = _event("Earlier", datetime(2024, 3, 15, 9, 0))
    assert store.insert(later).ok
    assert store.insert(earlier).ok
    # no implicit sort
    assert store.all() == [later, earlier]
    assert len(store) == 2


def test_duplicate_timestamp_rejected_regardless_of_other_fields() -> None:
    store = EventStore()
    dt    = datetime(2024, 3, 15, 10, 0)
    first = _event("Team Sync", dt)
    assert store.insert(first).ok

    result = store.insert(Event(title="Dentist", date_time=dt, location="Town",
                                category=Category.PERSONAL))
    assert not result.ok
    assert isinstance(result.error, DuplicateTimestamp)
    assert store.all() == [first]


def test_one_minute_apart_is_allowed() -> None:
    store = EventStore()
    assert store.insert(_event("A", datetime(2024, 3, 15, 10, 0))).ok
    assert store.insert(_event("B", datetime(2024, 3, 15, 10, 1))).ok
    assert len(store) == 2


def test_all_returns_a_copy() -> None:
    store = EventStore()
    store.insert(_event("A", datetime(2024, 3, 15, 10, 0)))
    snapshot = store.all()
    snapshot.clear()
    assert len(store) == 1


def test_replace_all_swaps_contents() -> None:
    store = EventStore()
    store.insert(_event("Old", datetime(2024, 1, 1, 8, 0)))
    new = [_event("New", datetime(2024, 2, 2, 8, 0))]
    store.replace_all(new)
    assert store.all() == new
    assert list(store) == new


def test_category_from_text_is_case_insensitive() -> None:
    assert Category.from_text("work") is Category.WORK
    assert Category.from_text(" Meeting ") is Category.MEETING
    with pytest.raises(ValidationError):
        Category.from_text("Holiday")


def test_category_names_in_display_order() -> None:
    assert Category.names() == ["Meeting", "Personal", "Work", "Other"]


def test_store_cannot_be_seeded_past_the_time_check() -> None:
    e = _event("A", datetime(2024, 3, 15, 10, 0))
    with pytest.raises(TypeError):
        EventStore([e, e])  # type: ignore[call-arg]
