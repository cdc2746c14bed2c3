from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.vacation_block import VacationBlock


class BookingStorePort(ABC):
    @abstractmethod
    def add(self, booking: Booking) -> None:
        """Persist a new booking. Raises DuplicateInvoiceError if invoice_id is taken."""
        raise NotImplementedError

    @abstractmethod
    def get_by_invoice_id(self, invoice_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def list_bookings(self, status: BookingStatus | None = None, search: str | None = None) -> list[Booking]:
        """
        List bookings newest first.
        `search` matches name or email, case-insensitive.
        """
        raise NotImplementedError

    @abstractmethod
    def transition_status(
        self, invoice_id: str, new_status: BookingStatus, at: datetime
    ) -> tuple[Booking, Booking] | None:
        """
        Atomic compare-and-set of the booking status.
        Applies the change only when the current status allows it and returns (before, after);
        after is before when nothing changed. Returns None if the invoice is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    def attach_calendar_event(self, invoice_id: str, event_id: str) -> bool:
        """Record the calendar event id unless one is already set. Returns True if recorded."""
        raise NotImplementedError


class VacationStorePort(ABC):
    @abstractmethod
    def add(self, block: VacationBlock) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, block_id: str) -> VacationBlock | None:
        raise NotImplementedError

    @abstractmethod
    def set_calendar_event_id(self, block_id: str, event_id: str) -> VacationBlock | None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, block_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def list_blocks(self) -> list[VacationBlock]:
        """List blocks, latest start date first."""
        raise NotImplementedError

    @abstractmethod
    def list_overlapping(self, from_date: date, to_date: date) -> list[VacationBlock]:
        """Blocks sharing at least one day with [from_date, to_date]."""
        raise NotImplementedError


class SettingsStorePort(ABC):
    @abstractmethod
    def get_value(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set_value(self, key: str, value: str) -> None:
        raise NotImplementedError
