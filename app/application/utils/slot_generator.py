from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterable

from app.domain.entities.schedule import BusyInterval, TimeSlot, WorkingHours


def generate_slots(
    range_start: datetime,
    range_end: datetime,
    busy_intervals: Iterable[BusyInterval],
    block_minutes: int,
    working_hours: WorkingHours,
    buffer_minutes: int,
) -> list[TimeSlot]:
    """
    Hourly bookable slots for each weekday in [range_start, range_end).

    `block_minutes` is the calendar-blocking duration, which may be longer than the
    advertised session length. Busy intervals are padded by `buffer_minutes` on both
    sides before the half-open overlap test. Days are taken in range_start's timezone.
    """
    if working_hours.start >= working_hours.end or block_minutes <= 0:
        return []

    buffer = timedelta(minutes=buffer_minutes)
    padded = [(busy.start - buffer, busy.end + buffer) for busy in busy_intervals]
    block = timedelta(minutes=block_minutes)
    tz = range_start.tzinfo

    slots: list[TimeSlot] = []
    day = range_start.date()
    while _at(day, 0, tz) < range_end:
        if day.weekday() < 5:
            closing = _at(day, working_hours.end, tz)
            for hour in range(working_hours.start, working_hours.end):
                slot_start = _at(day, hour, tz)
                slot_end = slot_start + block
                # later hours only end later
                if slot_end > closing:
                    break
                if any(slot_start < busy_end and slot_end > busy_start for busy_start, busy_end in padded):
                    continue
                slots.append(TimeSlot(start=slot_start, end=slot_end, label=format_slot_label(slot_start)))
        day += timedelta(days=1)

    return slots


def format_slot_label(value: datetime) -> str:
    return value.strftime("%a, %b %d, %I:%M %p")


def vacation_day_bounds(start_date: date, end_date: date, tz: tzinfo | None) -> BusyInterval:
    """Whole-day busy interval for an inclusive date range."""
    return BusyInterval(start=_at(start_date, 0, tz), end=_at(end_date + timedelta(days=1), 0, tz))


def _at(day: date, hour: int, tz: tzinfo | None) -> datetime:
    return datetime.combine(day, time(hour=hour), tzinfo=tz)
