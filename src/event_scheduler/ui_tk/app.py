"""
Main application window — Event Scheduler.

Layout, top to bottom:
  1. Add Event      — title, date, time, location, category, Add button
  2. Search Events  — field + keyword, Search / Show All / Save / Load
  3. Event table    — Title | Date | Time | Location | Category
  4. Status bar

Every button hands off to AppState and shows the Success/Failure it gets
back; the window itself holds no events.

The reminder poller is armed with self.after, so reminders pop up on the
Tk main loop between user actions and never race with them.

ttk.Treeview is used for the table.
Reference: Python Software Foundation. "tkinter.ttk — Tk themed widgets."
https://docs.python.org/3/library/tkinter.ttk.html#treeview
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Iterable, Optional

from event_scheduler.formatting import to_row
from event_scheduler.models import Category, Event
from event_scheduler.reminders import Reminder
from event_scheduler.search import SearchField
from event_scheduler.settings import Settings
from event_scheduler.state import AppState

log = logging.getLogger(__name__)


class App(tk.Tk):
    def __init__(self, state: Optional[AppState] = None) -> None:
        super().__init__()
        self.title("Event Scheduler")
        self.geometry("900x600")
        self.minsize(720, 420)

        self._state = state or AppState()

        self._build_form()
        self._build_search()
        self._build_table()
        self._build_statusbar()

        self._poller = self._state.make_poller(self._on_reminder)
        self._poller.start(self.after)
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # ---- form ----------------------------------------------------------------

    def _build_form(self) -> None:
        frm = ttk.LabelFrame(self, text="Add Event", padding=6)
        frm.pack(fill="x", padx=6, pady=(6, 3))

        self._title_var    = tk.StringVar()
        self._date_var     = tk.StringVar()
        self._time_var     = tk.StringVar()
        self._location_var = tk.StringVar()
        self._category_var = tk.StringVar(value=Category.names()[0])

        fields = (
            ("Title:",              self._title_var,    14),
            ("Date (dd-MM-yyyy):",  self._date_var,     11),
            ("Time (HH:mm):",       self._time_var,      6),
            ("Location:",           self._location_var, 14),
        )
        for label, var, width in fields:
            ttk.Label(frm, text=label).pack(side="left")
            ttk.Entry(frm, textvariable=var, width=width).pack(side="left", padx=(2, 8))

        ttk.Label(frm, text="Category:").pack(side="left")
        ttk.Combobox(
            frm,
            textvariable=self._category_var,
            values=Category.names(),
            state="readonly",
            width=9,
        ).pack(side="left", padx=(2, 8))

        ttk.Button(frm, text="Add Event", command=self.on_add).pack(side="left")

    # ---- search bar ----------------------------------------------------------

    def _build_search(self) -> None:
        frm = ttk.LabelFrame(self, text="Search Events", padding=6)
        frm.pack(fill="x", padx=6, pady=3)

        self._field_var   = tk.StringVar(value=SearchField.TITLE.value)
        self._keyword_var = tk.StringVar()

        ttk.Label(frm, text="Search by:").pack(side="left")
        ttk.Combobox(
            frm,
            textvariable=self._field_var,
            values=SearchField.names(),
            state="readonly",
            width=9,
        ).pack(side="left", padx=(2, 6))
        ttk.Entry(frm, textvariable=self._keyword_var, width=18).pack(side="left", padx=(0, 6))

        ttk.Button(frm, text="Search",   command=self.on_search).pack(side="left", padx=2)
        ttk.Button(frm, text="Show All", command=self.refresh).pack(side="left", padx=2)
        ttk.Button(frm, text="Save",     command=self.on_save).pack(side="left", padx=(12, 2))
        ttk.Button(frm, text="Load",     command=self.on_load).pack(side="left", padx=2)

    # ---- table ---------------------------------------------------------------

    def _build_table(self) -> None:
        frm = ttk.Frame(self)
        frm.pack(fill="both", expand=True, padx=6, pady=3)

        cols    = ("title", "date", "time", "location", "category")
        widths  = (220, 100, 70, 200, 100)
        headers = ("Title", "Date", "Time", "Location", "Category")
        self.tree = ttk.Treeview(frm, columns=cols, show="headings", height=16)
        for col, w, h in zip(cols, widths, headers):
            self.tree.heading(col, text=h)
            self.tree.column(col, width=w, anchor="center")

        vsb = ttk.Scrollbar(frm, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        vsb.pack(side="right", fill="y")
        self.tree.pack(side="left", fill="both", expand=True)

    def _build_statusbar(self) -> None:
        self._status_var = tk.StringVar(value="No events yet.")
        ttk.Label(
            self,
            textvariable=self._status_var,
            relief="sunken",
            anchor="w",
            padding=(6, 2),
        ).pack(side="bottom", fill="x")

    # ---- actions -------------------------------------------------------------

    def on_add(self) -> None:
        result = self._state.add_event(
            self._title_var.get(),
            self._date_var.get(),
            self._time_var.get(),
            self._location_var.get(),
            self._category_var.get(),
        )
        if not result.ok:
            messagebox.showerror("Cannot add event", result.message)
            return
        self.refresh()
        self._clear_form()
        self._status_var.set(f"Added: {result.value.title}")

    def on_search(self) -> None:
        keyword = self._keyword_var.get().strip()
        if not keyword: return
        hits = self._state.search(self._field_var.get(), keyword)
        self._show(hits)
        self._status_var.set(f"{len(hits)} match(es) for '{keyword}'")

    def on_save(self) -> None:
        result = self._state.save()
        if not result.ok:
            messagebox.showerror("Save error", f"Failed to save events.\n\n{result.message}")
            return
        messagebox.showinfo("Saved", "Events saved.")
        self._status_var.set(f"Saved: {result.value}")

    def on_load(self) -> None:
        result = self._state.load()
        if not result.ok:
            messagebox.showerror("Load error", f"Failed to load events.\n\n{result.message}")
            return
        self.refresh()
        messagebox.showinfo("Loaded", "Events loaded.")
        self._status_var.set(f"Loaded {len(result.value)} event(s) from {self._state.data_path}")

    def _on_reminder(self, reminder: Reminder) -> None:
        messagebox.showinfo("Reminder", reminder.message)

    def _on_close(self) -> None:
        self._poller.stop()
        self.destroy()

    # ---- helpers -------------------------------------------------------------

    def refresh(self) -> None:
        """Show every event in insertion order."""
        events = self._state.events()
        self._show(events)
        self._status_var.set(f"{len(events)} event(s)")

    def _show(self, events: Iterable[Event]) -> None:
        self.tree.delete(*self.tree.get_children())
        for e in events:
            self.tree.insert("", "end", values=to_row(e))

    def _clear_form(self) -> None:
        for var in (self._title_var, self._date_var, self._time_var, self._location_var):
            var.set("")
        self._category_var.set(Category.names()[0])


def main(settings: Optional[Settings] = None) -> None:
    settings = settings or Settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = App(AppState(settings))
    app.mainloop()


if __name__ == "__main__":
    main()
