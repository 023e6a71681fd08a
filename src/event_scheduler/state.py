"""
Application state: the one object the window talks to.

Holds the event store and the settings; there is no module-level event
list. Every user action maps onto one method here and gets back a
Success or Failure to show.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from event_scheduler.formatting import parse
from event_scheduler.io_json import load_events, save_events
from event_scheduler.models import Category, Event, EventStore
from event_scheduler.reminders import Reminder, ReminderPoller
from event_scheduler.results import Failure, Result, ValidationError
from event_scheduler.search import SearchField, search
from event_scheduler.settings import Settings

log = logging.getLogger(__name__)


class AppState:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self.store    = EventStore()

    @property
    def data_path(self) -> Path:
        return Path(self.settings.data_file)

    def add_event(
        self,
        title: str,
        date_text: str,
        time_text: str,
        location: str,
        category: str,
    ) -> Result[Event]:
        title     = (title or "").strip()
        date_text = (date_text or "").strip()
        time_text = (time_text or "").strip()
        location  = (location or "").strip()
        if not (title and date_text and time_text and location):
            return Failure(ValidationError())
        try:
            cat = Category.from_text(category)
        except ValidationError as e:
            return Failure(e)

        parsed = parse(date_text, time_text)
        if not parsed.ok:
            return parsed
        return self.store.insert(
            Event(title=title, date_time=parsed.value, location=location, category=cat)
        )

    def events(self) -> List[Event]:
        return self.store.all()

    def search(self, field: str | SearchField, keyword: str) -> List[Event]:
        if not isinstance(field, SearchField):
            field = SearchField.from_text(field)
        return search(self.store.all(), field, keyword)

    def save(self) -> Result[Path]:
        return save_events(self.store.all(), self.data_path)

    def load(self) -> Result[List[Event]]:
        """Replace the store with the file's contents; on failure leave it alone."""
        result = load_events(self.data_path)
        if result.ok:
            self.store.replace_all(result.value)
            log.info("Store replaced with %d event(s)", len(result.value))
        return result

    def make_poller(
        self,
        notify: Callable[[Reminder], None],
        clock: Callable[[], datetime] = datetime.now,
    ) -> ReminderPoller:
        return ReminderPoller(
            self.store,
            notify,
            clock=clock,
            interval_seconds=self.settings.poll_interval_seconds,
            lookahead=self.settings.lookahead,
        )
