"""
Conversion between the form's text fields and a datetime.

The form uses two fixed patterns:
    date  dd-MM-yyyy   e.g. 15-03-2024
    time  HH:mm        e.g. 09:30   (24-hour)

datetime.strptime alone is too lenient here ("1-3-2024" and "9:5" both
parse), so the shape is checked with a regex first and strptime then
rejects impossible calendar values such as 31-02-2024 or 24:00.

Reference: Python docs — strftime() and strptime() Format Codes
https://docs.python.org/3/library/datetime.html#format-codes
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Tuple

from event_scheduler.models import Event
from event_scheduler.results import Failure, ParseError, Result, Success

DATE_FORMAT = "%d-%m-%Y"
TIME_FORMAT = "%H:%M"

_DATE_RE = re.compile(r"\d{2}-\d{2}-\d{4}")
_TIME_RE = re.compile(r"\d{2}:\d{2}")


def parse(date_text: str, time_text: str) -> Result[datetime]:
    date_text = (date_text or "").strip()
    time_text = (time_text or "").strip()
    if not _DATE_RE.fullmatch(date_text) or not _TIME_RE.fullmatch(time_text):
        return Failure(ParseError())
    try:
        dt = datetime.strptime(f"{date_text} {time_text}", f"{DATE_FORMAT} {TIME_FORMAT}")
    except ValueError:
        return Failure(ParseError())
    return Success(dt)


def format_date(dt: datetime) -> str:
    return dt.strftime(DATE_FORMAT)


def format_time(dt: datetime) -> str:
    return dt.strftime(TIME_FORMAT)


def to_row(event: Event) -> Tuple[str, str, str, str, str]:
    """One table row: title, date, time, location, category."""
    return (
        event.title,
        format_date(event.date_time),
        format_time(event.date_time),
        event.location,
        event.category.value,
    )


def format_reminder(event: Event) -> str:
    return f"Upcoming Event Reminder:\n{event.title} at {format_time(event.date_time)}"
