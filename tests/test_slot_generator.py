"""
Tests for hourly slot generation against busy intervals and working hours.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from app.application.utils.slot_generator import format_slot_label, generate_slots, vacation_day_bounds
from app.domain.entities.schedule import BusyInterval, WorkingHours

from conftest import TZ, day_at

MONDAY = date(2025, 1, 13)
SATURDAY = date(2025, 1, 11)
HOURS = WorkingHours(start=9, end=15)


def _generate(range_start, range_end, busy=(), block=120, hours=HOURS, buffer=60):
    return generate_slots(
        range_start=range_start,
        range_end=range_end,
        busy_intervals=list(busy),
        block_minutes=block,
        working_hours=hours,
        buffer_minutes=buffer,
    )


def test_busy_interval_with_buffer_leaves_only_afternoon_slot():
    """Busy 10:00-12:00 padded by an hour blocks 9:00-13:00; the 14:00 slot would overrun closing."""
    busy = [BusyInterval(start=day_at(MONDAY, 10), end=day_at(MONDAY, 12))]
    slots = _generate(day_at(MONDAY, 0), day_at(MONDAY + timedelta(days=1), 0), busy)

    assert [slot.start.hour for slot in slots] == [13]
    assert slots[0].end == day_at(MONDAY, 15)


def test_free_day_offers_every_hour_that_fits_before_closing():
    """With a 2h block and 9-15 hours, the last start is 13:00."""
    slots = _generate(day_at(MONDAY, 0), day_at(MONDAY + timedelta(days=1), 0))
    assert [slot.start.hour for slot in slots] == [9, 10, 11, 12, 13]


def test_weekend_start_yields_only_weekday_slots():
    """A range starting Saturday produces nothing until Monday."""
    slots = _generate(day_at(SATURDAY, 0), day_at(SATURDAY + timedelta(days=3), 0))

    assert slots
    assert {slot.start.date() for slot in slots} == {MONDAY}


def test_every_slot_respects_block_hours_and_busy_time():
    """Generated slots are weekday, block-length, inside hours, and clear of padded busy time."""
    busy = [
        BusyInterval(start=day_at(MONDAY, 11), end=day_at(MONDAY, 12)),
        BusyInterval(start=day_at(MONDAY + timedelta(days=2), 9), end=day_at(MONDAY + timedelta(days=2), 17)),
    ]
    range_start = day_at(MONDAY, 0)
    range_end = day_at(MONDAY + timedelta(days=14), 0)
    buffer = timedelta(minutes=60)

    slots = _generate(range_start, range_end, busy)

    assert slots
    for slot in slots:
        assert slot.start.weekday() < 5
        assert slot.end - slot.start == timedelta(minutes=120)
        assert HOURS.start <= slot.start.hour
        assert slot.end <= day_at(slot.start.date(), HOURS.end)
        assert range_start <= slot.start < range_end
        for interval in busy:
            assert not (slot.start < interval.end + buffer and slot.end > interval.start - buffer)


def test_slot_touching_padded_interval_is_allowed():
    """Overlap is half-open: a slot ending exactly where padding starts stays available."""
    busy = [BusyInterval(start=day_at(MONDAY, 14), end=day_at(MONDAY, 15))]
    slots = _generate(day_at(MONDAY, 0), day_at(MONDAY + timedelta(days=1), 0), busy)

    # padded busy starts 13:00, so 11:00-13:00 is the last one that fits
    assert [slot.start.hour for slot in slots] == [9, 10, 11]


def test_empty_or_inverted_range_has_no_slots():
    start = day_at(MONDAY, 0)
    assert _generate(start, start) == []
    assert _generate(start, start - timedelta(days=1)) == []


def test_zero_buffer_and_no_busy_uses_exact_boundaries():
    busy = [BusyInterval(start=day_at(MONDAY, 9), end=day_at(MONDAY, 11))]
    slots = _generate(day_at(MONDAY, 0), day_at(MONDAY + timedelta(days=1), 0), busy, buffer=0)
    assert [slot.start.hour for slot in slots] == [11, 12, 13]


def test_block_longer_than_working_day_yields_nothing():
    slots = _generate(day_at(MONDAY, 0), day_at(MONDAY + timedelta(days=5), 0), block=7 * 60)
    assert slots == []


def test_slots_carry_timezone_and_label():
    slots = _generate(day_at(MONDAY, 0), day_at(MONDAY + timedelta(days=1), 0))
    first = slots[0]

    assert first.start.tzinfo == TZ
    assert first.label == format_slot_label(first.start)
    assert first.label == "Mon, Jan 13, 09:00 AM"
    assert first.start_iso == "2025-01-13T09:00:00+02:00"


def test_vacation_day_bounds_cover_whole_inclusive_range():
    bounds = vacation_day_bounds(date(2025, 1, 14), date(2025, 1, 15), TZ)

    assert bounds.start == datetime(2025, 1, 14, 0, 0, tzinfo=TZ)
    assert bounds.end == datetime(2025, 1, 16, 0, 0, tzinfo=TZ)


def test_generation_is_deterministic():
    busy = [BusyInterval(start=day_at(MONDAY, 10), end=day_at(MONDAY, 11))]
    args = (day_at(SATURDAY, 0), day_at(SATURDAY + timedelta(days=10), 0), busy)
    assert _generate(*args) == _generate(*args)
