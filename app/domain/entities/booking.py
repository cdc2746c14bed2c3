from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not BookingStatus.PENDING

    def can_transition_to(self, target: BookingStatus) -> bool:
        # pending is the only state with outbound transitions, and only into terminal states
        return self is BookingStatus.PENDING and target.is_terminal


@dataclass(frozen=True)
class Booking:
    id: str
    invoice_id: str
    name: str
    email: str
    session_type: str
    selected_slot: datetime
    amount: int  # major currency units
    created_at: datetime
    status: BookingStatus = BookingStatus.PENDING
    phone: str | None = None
    note: str | None = None
    calendar_event_id: str | None = None
    paid_at: datetime | None = None
