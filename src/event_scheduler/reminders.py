"""
Reminder poller: every minute, alert on events starting within the hour.

The poller is not tied to Tk. start() takes any "call me later" function
with the signature schedule(delay_ms, callback); tkinter's widget.after
has exactly that shape, so the window passes self.after and every firing
runs on the Tk main loop alongside the user's own actions.

Reminders are NOT de-duplicated: an event 30 minutes away is reported on
every firing until it starts, i.e. up to once a minute for an hour.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, List, Optional

from event_scheduler.formatting import format_reminder
from event_scheduler.models import Event, EventStore

log = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 60
LOOKAHEAD = timedelta(hours=1)

Schedule = Callable[[int, Callable[[], None]], Any]


@dataclass(frozen=True)
class Reminder:
    event:   Event
    message: str


def due_reminders(
    events: Iterable[Event],
    now: datetime,
    lookahead: timedelta = LOOKAHEAD,
) -> List[Reminder]:
    """Events whose start lies strictly between now and now + lookahead."""
    out: List[Reminder] = []
    for e in events:
        delta = e.date_time - now
        if timedelta(0) < delta < lookahead:
            out.append(Reminder(event=e, message=format_reminder(e)))
    return out


class ReminderPoller:
    def __init__(
        self,
        store: EventStore,
        notify: Callable[[Reminder], None],
        clock: Callable[[], datetime] = datetime.now,
        interval_seconds: int = POLL_INTERVAL_SECONDS,
        lookahead: timedelta = LOOKAHEAD,
    ) -> None:
        self._store     = store
        self._notify    = notify
        self._clock     = clock
        self._interval  = interval_seconds
        self._lookahead = lookahead
        self._schedule: Optional[Schedule] = None
        self._running   = False
        self._armed     = 0   # bumped by start/stop; older pending firings see a stale value

    @property
    def running(self) -> bool:
        return self._running

    def check(self, now: Optional[datetime] = None) -> List[Reminder]:
        """One firing. Notifies for, and returns, every event in the window."""
        if now is None:
            now = self._clock()
        reminders = due_reminders(self._store.all(), now, self._lookahead)
        for r in reminders:
            log.debug("Reminder for %r at %s", r.event.title, r.event.date_time)
            self._notify(r)
        return reminders

    def start(self, schedule: Schedule) -> None:
        """Arm the first firing one interval from now; each firing re-arms the next."""
        if self._running:
            return
        self._schedule = schedule
        self._running  = True
        self._armed   += 1
        log.info("Reminder poller started (every %ss)", self._interval)
        self._arm()

    def stop(self) -> None:
        self._running = False
        self._armed  += 1

    def _arm(self) -> None:
        if self._schedule is not None:
            armed = self._armed
            self._schedule(self._interval * 1000, lambda: self._tick(armed))

    def _tick(self, armed: int) -> None:
        if not self._running or armed != self._armed:
            return
        try:
            self.check()
        except Exception:
            # a broken notify must not kill the poller for the rest of the session
            log.exception("Reminder check failed")
        self._arm()
