from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime

from app.application.exceptions import DuplicateInvoiceError
from app.application.ports.studio_store import BookingStorePort, SettingsStorePort, VacationStorePort
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.vacation_block import VacationBlock
from app.infrastructure.store.json_store import apply_transition, matches_search


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._bookings: dict[str, Booking] = {}
        self._lock = threading.Lock()

    def add(self, booking: Booking) -> None:
        with self._lock:
            if booking.invoice_id in self._bookings:
                raise DuplicateInvoiceError(booking.invoice_id)
            self._bookings[booking.invoice_id] = booking

    def get_by_invoice_id(self, invoice_id: str) -> Booking | None:
        return self._bookings.get(invoice_id)

    def list_bookings(self, status: BookingStatus | None = None, search: str | None = None) -> list[Booking]:
        bookings = [
            b
            for b in list(self._bookings.values())
            if (status is None or b.status is status) and matches_search(b, search)
        ]
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def transition_status(
        self, invoice_id: str, new_status: BookingStatus, at: datetime
    ) -> tuple[Booking, Booking] | None:
        with self._lock:
            before = self._bookings.get(invoice_id)
            if before is None:
                return None
            after = apply_transition(before, new_status, at)
            self._bookings[invoice_id] = after
            return before, after

    def attach_calendar_event(self, invoice_id: str, event_id: str) -> bool:
        with self._lock:
            booking = self._bookings.get(invoice_id)
            if booking is None or booking.calendar_event_id:
                return False
            self._bookings[invoice_id] = replace(booking, calendar_event_id=event_id)
            return True


class MemoryVacationStore(VacationStorePort):
    def __init__(self) -> None:
        self._blocks: dict[str, VacationBlock] = {}
        self._lock = threading.Lock()

    def add(self, block: VacationBlock) -> None:
        with self._lock:
            self._blocks[block.id] = block

    def get(self, block_id: str) -> VacationBlock | None:
        return self._blocks.get(block_id)

    def set_calendar_event_id(self, block_id: str, event_id: str) -> VacationBlock | None:
        with self._lock:
            block = self._blocks.get(block_id)
            if block is None:
                return None
            updated = replace(block, calendar_event_id=event_id)
            self._blocks[block_id] = updated
            return updated

    def delete(self, block_id: str) -> bool:
        with self._lock:
            return self._blocks.pop(block_id, None) is not None

    def list_blocks(self) -> list[VacationBlock]:
        return sorted(self._blocks.values(), key=lambda b: b.start_date, reverse=True)

    def list_overlapping(self, from_date: date, to_date: date) -> list[VacationBlock]:
        return [block for block in self.list_blocks() if block.overlaps(from_date, to_date)]


class MemorySettingsStore(SettingsStorePort):
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get_value(self, key: str) -> str | None:
        return self._values.get(key)

    def set_value(self, key: str, value: str) -> None:
        self._values[key] = value
