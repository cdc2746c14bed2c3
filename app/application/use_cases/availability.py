from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from typing import Callable
from zoneinfo import ZoneInfo

from app.application.ports.calendar import CalendarPort
from app.application.ports.studio_store import VacationStorePort
from app.application.use_cases.working_hours import WorkingHoursUseCase
from app.application.utils.slot_generator import generate_slots, vacation_day_bounds
from app.domain.entities.schedule import BusyInterval, TimeSlot


class GetAvailabilityUseCase:
    def __init__(
        self,
        calendar: CalendarPort,
        working_hours: WorkingHoursUseCase,
        vacations: VacationStorePort,
        timezone: ZoneInfo,
        block_minutes: int = 120,
        buffer_minutes: int = 60,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._calendar = calendar
        self._working_hours = working_hours
        self._vacations = vacations
        self._timezone = timezone
        self._block_minutes = block_minutes
        self._buffer_minutes = buffer_minutes
        self._now = now or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def execute(self, days_ahead: int) -> list[TimeSlot]:
        """
        Bookable slots from tomorrow for `days_ahead` days.
        Calendar failures propagate; vacation blocks count as busy even if never mirrored.
        """
        if days_ahead < 1:
            raise ValueError("days must be at least 1")

        today = self._now().astimezone(self._timezone).date()
        range_start = datetime.combine(today + timedelta(days=1), time(0), tzinfo=self._timezone)
        range_end = datetime.combine(range_start.date() + timedelta(days=days_ahead), time(0), tzinfo=self._timezone)

        busy = list(self._calendar.query_busy(range_start, range_end))
        busy.extend(self._vacation_busy(range_start, range_end))

        slots = generate_slots(
            range_start=range_start,
            range_end=range_end,
            busy_intervals=busy,
            block_minutes=self._block_minutes,
            working_hours=self._working_hours.get(),
            buffer_minutes=self._buffer_minutes,
        )
        self._logger.info(
            "Generated %s slots from %s to %s",
            len(slots),
            range_start.date().isoformat(),
            range_end.date().isoformat(),
        )
        return slots

    def _vacation_busy(self, range_start: datetime, range_end: datetime) -> list[BusyInterval]:
        blocks = self._vacations.list_overlapping(range_start.date(), (range_end - timedelta(days=1)).date())
        return [vacation_day_bounds(block.start_date, block.end_date, self._timezone) for block in blocks]
