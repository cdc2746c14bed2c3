"""
Tests for admin-editable working hours.
"""

from __future__ import annotations

import pytest

from app.application.use_cases.working_hours import WORKING_HOURS_KEY, WorkingHoursUseCase
from app.domain.entities.schedule import DEFAULT_WORKING_HOURS, WorkingHours
from app.infrastructure.store.memory_store import MemorySettingsStore


def test_default_when_nothing_stored():
    assert WorkingHoursUseCase(MemorySettingsStore()).get() == DEFAULT_WORKING_HOURS


def test_update_round_trips_through_store():
    store = MemorySettingsStore()
    uc = WorkingHoursUseCase(store)

    uc.update(8, 18)

    assert uc.get() == WorkingHours(start=8, end=18)


@pytest.mark.parametrize("start,end", [(15, 9), (10, 10), (-1, 5), (9, 24)])
def test_update_rejects_invalid_hours(start, end):
    store = MemorySettingsStore()
    with pytest.raises(ValueError):
        WorkingHoursUseCase(store).update(start, end)
    assert store.get_value(WORKING_HOURS_KEY) is None


@pytest.mark.parametrize("raw", ["not json", '{"start": 9}', '{"start": 16, "end": 10}', "[1, 2]"])
def test_unreadable_stored_value_falls_back_to_default(raw):
    store = MemorySettingsStore()
    store.set_value(WORKING_HOURS_KEY, raw)
    assert WorkingHoursUseCase(store).get() == DEFAULT_WORKING_HOURS
