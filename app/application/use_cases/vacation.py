from __future__ import annotations

import logging
import uuid
from datetime import date, timedelta

from app.application.exceptions import VacationNotFoundError
from app.application.ports.calendar import CalendarPort
from app.application.ports.studio_store import VacationStorePort
from app.domain.entities.vacation_block import VacationBlock


class VacationUseCase:
    def __init__(self, store: VacationStorePort, calendar: CalendarPort) -> None:
        self._store = store
        self._calendar = calendar
        self._logger = logging.getLogger(__name__)

    def list_blocks(self) -> list[VacationBlock]:
        return self._store.list_blocks()

    def block(self, start_date: date, end_date: date, reason: str | None = None) -> VacationBlock:
        """
        Persist a vacation block, then mirror it to the calendar as an all-day event.
        The block is kept even if the mirror fails.
        """
        if start_date > end_date:
            raise ValueError("startDate must not be after endDate")

        block = VacationBlock(
            id=uuid.uuid4().hex,
            start_date=start_date,
            end_date=end_date,
            reason=(reason or "").strip() or None,
        )
        self._store.add(block)
        self._logger.info("Vacation block created", extra={"vacation_id": block.id})

        try:
            event_id = self._calendar.create_event(
                summary=f"Blocked: {block.reason or 'Vacation'}",
                description="Dates blocked for booking",
                start=block.start_date,
                end=block.end_date + timedelta(days=1),
                all_day=True,
            )
        except Exception as e:
            self._logger.error(
                "Failed to mirror vacation to calendar",
                extra={"vacation_id": block.id, "error": str(e)},
            )
            return block

        updated = self._store.set_calendar_event_id(block.id, event_id)
        self._logger.info("Vacation mirrored to calendar", extra={"vacation_id": block.id, "event_id": event_id})
        return updated or block

    def unblock(self, block_id: str) -> None:
        block = self._store.get(block_id)
        if block is None:
            raise VacationNotFoundError(block_id)

        if block.calendar_event_id:
            try:
                if not self._calendar.delete_event(block.calendar_event_id):
                    self._logger.warning(
                        "Mirrored vacation event already gone",
                        extra={"vacation_id": block_id, "event_id": block.calendar_event_id},
                    )
            except Exception as e:
                self._logger.error(
                    "Failed to delete vacation event from calendar",
                    extra={"vacation_id": block_id, "event_id": block.calendar_event_id, "error": str(e)},
                )

        if not self._store.delete(block_id):
            raise VacationNotFoundError(block_id)
        self._logger.info("Vacation block deleted", extra={"vacation_id": block_id})
