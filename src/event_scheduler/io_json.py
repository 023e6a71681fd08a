"""
JSON serialisation / deserialisation for the event list.

Uses only the Python standard-library json module. The file layout is an
explicit schema, not a pickled object graph:

    {
      "version": 1,
      "events": [
        {"title": "...", "location": "...", "category": "Meeting",
         "date_time": "2024-03-15T09:30:00"}
      ]
    }

date_time is written with datetime.isoformat() and read back with
datetime.fromisoformat(), which round-trips seconds and microseconds
exactly. Structural validation is applied before Event objects are built
so a hand-edited or truncated file is reported, never half-loaded.

Reference: Python docs — json
https://docs.python.org/3/library/json.html
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List

from event_scheduler.models import Category, Event
from event_scheduler.results import (Failure, FormatError, Result, StorageError,
    Success, ValidationError)

log = logging.getLogger(__name__)

DEFAULT_FILENAME = "events.dat"
SCHEMA_VERSION   = 1


def _require(obj: Dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise FormatError(f"Missing required key '{key}' in {ctx}")
    return obj[key]


def _as_list(obj: Any, ctx: str) -> List[Any]:
    if not isinstance(obj, list):
        raise FormatError(f"Expected a JSON array in {ctx}, got {type(obj).__name__}")
    return obj


def _as_dict(obj: Any, ctx: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise FormatError(
            f"Expected a JSON object in {ctx}, got {type(obj).__name__}"
        )
    return obj


def _as_text(obj: Any, ctx: str) -> str:
    if not isinstance(obj, str) or not obj.strip():
        raise FormatError(f"Expected non-empty text in {ctx}")
    return obj


def _event_to_dict(e: Event) -> Dict[str, Any]:
    return {
        "title":     e.title,
        "location":  e.location,
        "category":  e.category.value,
        "date_time": e.date_time.isoformat(),
    }


def _event_from_dict(raw: Any, ctx: str) -> Event:
    raw = _as_dict(raw, ctx)
    stamp = _as_text(_require(raw, "date_time", ctx), f"{ctx}.date_time")
    try:
        date_time = datetime.fromisoformat(stamp)
    except ValueError:
        raise FormatError(f"Bad timestamp {stamp!r} in {ctx}") from None
    if date_time.tzinfo is not None:
        raise FormatError(f"Timestamp with timezone in {ctx}")
    try:
        category = Category.from_text(_as_text(_require(raw, "category", ctx), f"{ctx}.category"))
    except ValidationError as e:
        raise FormatError(f"{e.message} in {ctx}") from None
    return Event(
        title     = _as_text(_require(raw, "title",    ctx), f"{ctx}.title"),
        date_time = date_time,
        location  = _as_text(_require(raw, "location", ctx), f"{ctx}.location"),
        category  = category,
    )


def _check_unique_times(events: List[Event]) -> None:
    seen: set = set()
    for e in events:
        if e.date_time in seen:
            raise FormatError(f"Duplicate event time in file: {e.date_time.isoformat()}")
        seen.add(e.date_time)


def _decode(text: str) -> List[Event]:
    try:
        raw = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; so is an over-long integer literal
        raise FormatError(f"Not valid JSON: {e}") from None
    raw = _as_dict(raw, "root")
    version = raw.get("version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise FormatError(f"Unsupported file version: {version!r}")
    events_raw = _as_list(_require(raw, "events", "root"), "events")
    events = [_event_from_dict(e, f"events[{i}]") for i, e in enumerate(events_raw)]
    _check_unique_times(events)
    return events


def load_events(path: str | Path = DEFAULT_FILENAME) -> Result[List[Event]]:
    """Read and validate an event list. Never touches any store."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        log.warning("Could not read %s: %s", p, e)
        return Failure(StorageError(f"Could not read {p}: {e}"))
    try:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            raise FormatError("File is not UTF-8 text") from None
        events = _decode(text)
    except FormatError as e:
        log.warning("Could not load %s: %s", p, e.message)
        return Failure(e)
    log.info("Loaded %d event(s) from %s", len(events), p)
    return Success(events)


def save_events(events: Iterable[Event], path: str | Path = DEFAULT_FILENAME) -> Result[Path]:
    """Write the whole list, creating parent directories if needed. Not atomic."""
    events = list(events)
    payload = {
        "version": SCHEMA_VERSION,
        "events":  [_event_to_dict(e) for e in events],
    }
    p = Path(path)
    try:
        # ensure_ascii=False keeps accented titles readable in the file.
        data = json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")
    except UnicodeEncodeError as e:
        log.warning("Could not encode events for %s: %s", p, e)
        return Failure(StorageError(f"Could not write {p}: {e}"))
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    except OSError as e:
        log.warning("Could not save %s: %s", p, e)
        return Failure(StorageError(f"Could not write {p}: {e}"))
    log.info("Saved %d event(s) to %s", len(events), p)
    return Success(p)
