from __future__ import annotations

import logging
from datetime import date, datetime

from app.application.ports.calendar import CalendarPort
from app.domain.entities.schedule import BusyInterval


class MockCalendar(CalendarPort):
    """In-memory calendar. Timed events also show up as busy intervals."""

    def __init__(self, busy: list[BusyInterval] | None = None) -> None:
        self._busy: list[BusyInterval] = list(busy or [])
        self._events: dict[str, dict] = {}
        self._counter = 0
        self._logger = logging.getLogger(__name__)

    @property
    def events(self) -> dict[str, dict]:
        return dict(self._events)

    def add_busy(self, start: datetime, end: datetime) -> None:
        self._busy.append(BusyInterval(start=start, end=end))

    def query_busy(self, time_min: datetime, time_max: datetime) -> list[BusyInterval]:
        intervals = list(self._busy)
        for event in self._events.values():
            if not event["all_day"]:
                intervals.append(BusyInterval(start=event["start"], end=event["end"]))
        return [b for b in intervals if b.start < time_max and b.end > time_min]

    def create_event(
        self,
        summary: str,
        start: datetime | date,
        end: datetime | date,
        description: str | None = None,
        all_day: bool = False,
    ) -> str:
        self._counter += 1
        event_id = f"mock_event_{self._counter}"
        self._events[event_id] = {
            "summary": summary,
            "description": description,
            "start": start,
            "end": end,
            "all_day": all_day,
        }
        self._logger.info("Mock calendar event created", extra={"event_id": event_id})
        return event_id

    def delete_event(self, event_id: str) -> bool:
        if event_id in self._events:
            del self._events[event_id]
            self._logger.info("Mock calendar event deleted", extra={"event_id": event_id})
            return True
        return False
