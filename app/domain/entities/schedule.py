from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WorkingHours:
    """Daily window (whole hours) in which a session may start."""

    start: int = 9
    end: int = 15

    @property
    def is_valid(self) -> bool:
        return 0 <= self.start < self.end <= 23


DEFAULT_WORKING_HOURS = WorkingHours(start=9, end=15)


@dataclass(frozen=True)
class BusyInterval:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class TimeSlot:
    start: datetime
    end: datetime
    label: str

    @property
    def start_iso(self) -> str:
        return self.start.isoformat()

    @property
    def end_iso(self) -> str:
        return self.end.isoformat()
