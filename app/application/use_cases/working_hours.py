from __future__ import annotations

import json
import logging

from app.application.ports.studio_store import SettingsStorePort
from app.domain.entities.schedule import DEFAULT_WORKING_HOURS, WorkingHours

WORKING_HOURS_KEY = "working_hours"


class WorkingHoursUseCase:
    def __init__(self, store: SettingsStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def get(self) -> WorkingHours:
        raw = self._store.get_value(WORKING_HOURS_KEY)
        if raw is None:
            return DEFAULT_WORKING_HOURS
        try:
            data = json.loads(raw)
            hours = WorkingHours(start=int(data["start"]), end=int(data["end"]))
        except (ValueError, KeyError, TypeError) as e:
            self._logger.warning("Stored working hours unreadable, using default", extra={"error": str(e)})
            return DEFAULT_WORKING_HOURS
        if not hours.is_valid:
            self._logger.warning("Stored working hours invalid, using default", extra={"reason": raw})
            return DEFAULT_WORKING_HOURS
        return hours

    def update(self, start: int, end: int) -> WorkingHours:
        hours = WorkingHours(start=start, end=end)
        if not hours.is_valid:
            raise ValueError("Working hours must satisfy 0 <= start < end <= 23")
        self._store.set_value(WORKING_HOURS_KEY, json.dumps({"start": hours.start, "end": hours.end}))
        self._logger.info("Working hours updated", extra={"reason": f"{hours.start}-{hours.end}"})
        return hours
