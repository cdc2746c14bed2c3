from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class VacationBlock:
    id: str
    start_date: date
    end_date: date  # inclusive
    reason: str | None = None
    calendar_event_id: str | None = None

    def overlaps(self, from_date: date, to_date: date) -> bool:
        return self.start_date <= to_date and self.end_date >= from_date
