from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from event_scheduler.formatting import format_date
from event_scheduler.models import Event
from event_scheduler.results import ValidationError


class SearchField(str, Enum):
    TITLE    = "Title"
    DATE     = "Date"
    CATEGORY = "Category"

    @classmethod
    def names(cls) -> List[str]:
        return [f.value for f in cls]

    @classmethod
    def from_text(cls, text: str) -> "SearchField":
        key = (text or "").strip().lower()
        for f in cls:
            if f.value.lower() == key:
                return f
        raise ValidationError(f"Unknown search field: {text!r}")


def _matches(event: Event, field: SearchField, keyword: str) -> bool:
    if field is SearchField.TITLE:
        return keyword in event.title.casefold()
    if field is SearchField.CATEGORY:
        return keyword in event.category.value.casefold()
    # dates match whole, not by substring: "03-2024" finds nothing
    return format_date(event.date_time).casefold() == keyword


def search(events: Iterable[Event], field: SearchField, keyword: str) -> List[Event]:
    """Filter events, keeping their order. An empty keyword keeps everything."""
    keyword = (keyword or "").strip().casefold()
    if not keyword:
        return list(events)
    return [e for e in events if _matches(e, field, keyword)]
