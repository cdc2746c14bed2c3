"""
Tests for the availability use case: range selection, busy merging, and working hours.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from app.application.exceptions import CalendarUpstreamError
from app.application.use_cases.availability import GetAvailabilityUseCase
from app.application.use_cases.working_hours import WorkingHoursUseCase
from app.domain.entities.vacation_block import VacationBlock
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.store.memory_store import MemorySettingsStore, MemoryVacationStore

from conftest import NOW, TZ, FailingCalendar, day_at

THURSDAY = date(2025, 1, 9)
FRIDAY = date(2025, 1, 10)
MONDAY = date(2025, 1, 13)


def _use_case(calendar=None, vacations=None, settings_store=None):
    return GetAvailabilityUseCase(
        calendar=calendar or MockCalendar(),
        working_hours=WorkingHoursUseCase(settings_store or MemorySettingsStore()),
        vacations=vacations or MemoryVacationStore(),
        timezone=TZ,
        block_minutes=120,
        buffer_minutes=60,
        now=lambda: NOW,
    )


def test_range_starts_tomorrow_and_spans_requested_days():
    """Now is Wednesday; four days covers Thursday through Sunday."""
    slots = _use_case().execute(4)

    assert {slot.start.date() for slot in slots} == {THURSDAY, FRIDAY}
    assert len(slots) == 10


def test_calendar_busy_time_removes_slots():
    calendar = MockCalendar()
    calendar.add_busy(day_at(THURSDAY, 10), day_at(THURSDAY, 12))

    slots = _use_case(calendar=calendar).execute(1)

    assert [slot.start.hour for slot in slots] == [13]


def test_vacation_blocks_the_whole_day_without_calendar_event():
    """Vacations count as busy even if their calendar mirror never happened."""
    vacations = MemoryVacationStore()
    vacations.add(VacationBlock(id="v1", start_date=FRIDAY, end_date=MONDAY))

    slots = _use_case(vacations=vacations).execute(7)

    days = {slot.start.date() for slot in slots}
    assert FRIDAY not in days
    assert MONDAY not in days
    assert THURSDAY in days
    assert MONDAY + timedelta(days=1) in days


def test_stored_working_hours_are_used():
    settings_store = MemorySettingsStore()
    WorkingHoursUseCase(settings_store).update(10, 14)

    slots = _use_case(settings_store=settings_store).execute(1)

    assert [slot.start.hour for slot in slots] == [10, 11, 12]


def test_calendar_failure_propagates():
    with pytest.raises(CalendarUpstreamError):
        _use_case(calendar=FailingCalendar()).execute(7)


def test_days_must_be_positive():
    with pytest.raises(ValueError):
        _use_case().execute(0)
