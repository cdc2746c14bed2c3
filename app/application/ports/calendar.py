from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from app.domain.entities.schedule import BusyInterval


class CalendarPort(ABC):
    @abstractmethod
    def query_busy(self, time_min: datetime, time_max: datetime) -> list[BusyInterval]:
        """Free/busy query over [time_min, time_max)."""
        raise NotImplementedError

    @abstractmethod
    def create_event(
        self,
        summary: str,
        start: datetime | date,
        end: datetime | date,
        description: str | None = None,
        all_day: bool = False,
    ) -> str:
        """Create calendar event. For all-day events `end` is the exclusive end date. Returns event_id."""
        raise NotImplementedError

    @abstractmethod
    def delete_event(self, event_id: str) -> bool:
        """Delete calendar event. Returns False if the event no longer exists."""
        raise NotImplementedError
