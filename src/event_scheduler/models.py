"""
Data model layer for the event scheduler.

An Event is a frozen dataclass: once created it never changes, so the
store can hand out references without copying them.

Reference: Python Software Foundation. "dataclasses — Data Classes."
https://docs.python.org/3/library/dataclasses.html

Design note — one key per event:
  The start datetime is the only identity an event has. Two events may
  overlap in practice (a 10:00 meeting and a 10:01 call), but two events
  with exactly the same start are rejected at insert time.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Iterator, List

from event_scheduler.results import DuplicateTimestamp, Failure, Result, Success, ValidationError

log = logging.getLogger(__name__)


class Category(str, Enum):
    MEETING  = "Meeting"
    PERSONAL = "Personal"
    WORK     = "Work"
    OTHER    = "Other"

    @classmethod
    def names(cls) -> List[str]:
        return [c.value for c in cls]

    @classmethod
    def from_text(cls, text: str) -> "Category":
        key = (text or "").strip().lower()
        for c in cls:
            if c.value.lower() == key:
                return c
        raise ValidationError(f"Unknown category: {text!r}")


@dataclass(frozen=True)
class Event:
    title:     str
    date_time: datetime   # naive, no timezone
    location:  str
    category:  Category


class EventStore:
    """
    Insertion-ordered list of events. Grows by insert(), or is swapped out
    whole by replace_all() when a file is loaded. There is no edit or
    delete.
    """

    def __init__(self) -> None:
        self._events: List[Event] = []
        self._lock = threading.Lock()

    def insert(self, event: Event) -> Result[Event]:
        with self._lock:
            if any(e.date_time == event.date_time for e in self._events):
                log.warning("Rejected %r: %s already taken", event.title, event.date_time)
                return Failure(DuplicateTimestamp())
            self._events.append(event)
        log.info("Added %r at %s", event.title, event.date_time)
        return Success(event)

    def all(self) -> List[Event]:
        with self._lock:
            return list(self._events)

    def replace_all(self, events: Iterable[Event]) -> None:
        new_events = list(events)
        with self._lock:
            self._events = new_events

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.all())
