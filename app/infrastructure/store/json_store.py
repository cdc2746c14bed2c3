from __future__ import annotations

import json
import logging
import threading
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Any

from app.application.exceptions import DuplicateInvoiceError
from app.application.ports.studio_store import BookingStorePort, SettingsStorePort, VacationStorePort
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.vacation_block import VacationBlock


class _JsonCollection:
    """A dict persisted as one JSON file, rewritten atomically on every change."""

    def __init__(self, data_dir: str, name: str) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / f"{name}.json"
        self.lock = threading.RLock()
        self._logger = logging.getLogger(__name__)

    def load(self) -> dict[str, Any]:
        if not self._file_path.exists():
            return {}
        with open(self._file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data.get("items", {})

    def save(self, items: dict[str, Any]) -> None:
        temp_path = self._file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump({"version": 1, "items": items}, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise


def serialize_booking(booking: Booking) -> dict[str, Any]:
    return {
        "id": booking.id,
        "invoice_id": booking.invoice_id,
        "name": booking.name,
        "email": booking.email,
        "phone": booking.phone,
        "session_type": booking.session_type,
        "selected_slot": booking.selected_slot.isoformat(),
        "note": booking.note,
        "status": booking.status.value,
        "amount": booking.amount,
        "calendar_event_id": booking.calendar_event_id,
        "created_at": booking.created_at.isoformat(),
        "paid_at": booking.paid_at.isoformat() if booking.paid_at else None,
    }


def deserialize_booking(data: dict[str, Any]) -> Booking:
    return Booking(
        id=data["id"],
        invoice_id=data["invoice_id"],
        name=data["name"],
        email=data["email"],
        phone=data.get("phone"),
        session_type=data["session_type"],
        selected_slot=datetime.fromisoformat(data["selected_slot"]),
        note=data.get("note"),
        status=BookingStatus(data.get("status", "pending")),
        amount=int(data["amount"]),
        calendar_event_id=data.get("calendar_event_id"),
        created_at=datetime.fromisoformat(data["created_at"]),
        paid_at=datetime.fromisoformat(data["paid_at"]) if data.get("paid_at") else None,
    )


def serialize_vacation(block: VacationBlock) -> dict[str, Any]:
    return {
        "id": block.id,
        "start_date": block.start_date.isoformat(),
        "end_date": block.end_date.isoformat(),
        "reason": block.reason,
        "calendar_event_id": block.calendar_event_id,
    }


def deserialize_vacation(data: dict[str, Any]) -> VacationBlock:
    return VacationBlock(
        id=data["id"],
        start_date=date.fromisoformat(data["start_date"]),
        end_date=date.fromisoformat(data["end_date"]),
        reason=data.get("reason"),
        calendar_event_id=data.get("calendar_event_id"),
    )


def apply_transition(booking: Booking, new_status: BookingStatus, at: datetime) -> Booking:
    if not booking.status.can_transition_to(new_status):
        return booking
    return replace(booking, status=new_status, paid_at=at if new_status is BookingStatus.PAID else booking.paid_at)


def matches_search(booking: Booking, search: str | None) -> bool:
    if not search:
        return True
    needle = search.lower().strip()
    return needle in booking.name.lower() or needle in booking.email.lower()


class JsonBookingStore(BookingStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._collection = _JsonCollection(data_dir, "bookings")

    def add(self, booking: Booking) -> None:
        with self._collection.lock:
            items = self._collection.load()
            if booking.invoice_id in items:
                raise DuplicateInvoiceError(booking.invoice_id)
            items[booking.invoice_id] = serialize_booking(booking)
            self._collection.save(items)

    def get_by_invoice_id(self, invoice_id: str) -> Booking | None:
        with self._collection.lock:
            row = self._collection.load().get(invoice_id)
        return deserialize_booking(row) if row else None

    def list_bookings(self, status: BookingStatus | None = None, search: str | None = None) -> list[Booking]:
        with self._collection.lock:
            rows = list(self._collection.load().values())
        bookings = [deserialize_booking(row) for row in rows]
        bookings = [
            b for b in bookings if (status is None or b.status is status) and matches_search(b, search)
        ]
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def transition_status(
        self, invoice_id: str, new_status: BookingStatus, at: datetime
    ) -> tuple[Booking, Booking] | None:
        with self._collection.lock:
            items = self._collection.load()
            row = items.get(invoice_id)
            if row is None:
                return None
            before = deserialize_booking(row)
            after = apply_transition(before, new_status, at)
            if after is not before:
                items[invoice_id] = serialize_booking(after)
                self._collection.save(items)
            return before, after

    def attach_calendar_event(self, invoice_id: str, event_id: str) -> bool:
        with self._collection.lock:
            items = self._collection.load()
            row = items.get(invoice_id)
            if row is None or row.get("calendar_event_id"):
                return False
            row["calendar_event_id"] = event_id
            self._collection.save(items)
            return True


class JsonVacationStore(VacationStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._collection = _JsonCollection(data_dir, "vacations")

    def add(self, block: VacationBlock) -> None:
        with self._collection.lock:
            items = self._collection.load()
            items[block.id] = serialize_vacation(block)
            self._collection.save(items)

    def get(self, block_id: str) -> VacationBlock | None:
        with self._collection.lock:
            row = self._collection.load().get(block_id)
        return deserialize_vacation(row) if row else None

    def set_calendar_event_id(self, block_id: str, event_id: str) -> VacationBlock | None:
        with self._collection.lock:
            items = self._collection.load()
            row = items.get(block_id)
            if row is None:
                return None
            row["calendar_event_id"] = event_id
            self._collection.save(items)
            return deserialize_vacation(row)

    def delete(self, block_id: str) -> bool:
        with self._collection.lock:
            items = self._collection.load()
            if items.pop(block_id, None) is None:
                return False
            self._collection.save(items)
            return True

    def list_blocks(self) -> list[VacationBlock]:
        with self._collection.lock:
            rows = list(self._collection.load().values())
        return sorted((deserialize_vacation(row) for row in rows), key=lambda b: b.start_date, reverse=True)

    def list_overlapping(self, from_date: date, to_date: date) -> list[VacationBlock]:
        return [block for block in self.list_blocks() if block.overlaps(from_date, to_date)]


class JsonSettingsStore(SettingsStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._collection = _JsonCollection(data_dir, "settings")

    def get_value(self, key: str) -> str | None:
        with self._collection.lock:
            return self._collection.load().get(key)

    def set_value(self, key: str, value: str) -> None:
        with self._collection.lock:
            items = self._collection.load()
            items[key] = value
            self._collection.save(items)
