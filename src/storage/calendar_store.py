"""
In-memory calendar for one session.

Keeps the append-only event list and the set of dates that carry at least
one event. Nothing is written to disk; a restart starts from an empty store.
"""

from __future__ import annotations

import logging
import threading
from typing import FrozenSet, Iterable, List, Optional

from meeting_calendar.errors import EmptyTaskError
from meeting_calendar.models import Event, to_canonical_date

logger = logging.getLogger(__name__)


class CalendarStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: List[Event] = []
        self._marked_dates: set[str] = set()
        self._selected_date: Optional[str] = None

    @property
    def events(self) -> List[Event]:
        with self._lock:
            return list(self._events)

    @property
    def marked_dates(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._marked_dates)

    @property
    def selected_date(self) -> Optional[str]:
        with self._lock:
            return self._selected_date

    def merge(self, events: Iterable[Event]) -> int:
        """Append ``events`` and mark their dates. Returns how many were added."""
        batch = list(events)
        for e in batch:
            if not isinstance(e, Event):
                raise TypeError(f"expected Event, got {type(e).__name__}")

        with self._lock:
            self._events.extend(batch)
            self._marked_dates.update(e.date for e in batch)

        if batch:
            logger.info(f"Merged {len(batch)} event(s) into calendar")
        return len(batch)

    def add_task(self, date, task: str) -> Event:
        if task is None or not task.strip():
            raise EmptyTaskError("Task must not be empty")

        event = Event(date=date, task=task.strip())
        self.merge([event])
        return event

    def events_on(self, date) -> List[Event]:
        day = to_canonical_date(date)
        with self._lock:
            return [e for e in self._events if e.date == day]

    def is_marked(self, date) -> bool:
        day = to_canonical_date(date)
        with self._lock:
            return day in self._marked_dates

    def select(self, date) -> Optional[str]:
        day = to_canonical_date(date) if date is not None else None
        with self._lock:
            self._selected_date = day
        return day

    def snapshot(self) -> dict:
        """Consistent view of the whole store, for rendering."""
        with self._lock:
            return {
                "events": [e.model_dump() for e in self._events],
                "marked_dates": sorted(self._marked_dates),
                "selected_date": self._selected_date,
            }
