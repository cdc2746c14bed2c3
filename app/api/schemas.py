from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from app.domain.entities.booking import Booking
from app.domain.entities.schedule import TimeSlot
from app.domain.entities.session_type import SessionType
from app.domain.entities.vacation_block import VacationBlock


class TimeSlotSchema(BaseModel):
    startISO: str
    endISO: str
    label: str

    @classmethod
    def from_entity(cls, slot: TimeSlot) -> "TimeSlotSchema":
        return cls(startISO=slot.start_iso, endISO=slot.end_iso, label=slot.label)


class AvailabilityResponseSchema(BaseModel):
    slots: list[TimeSlotSchema]


class SessionTypeSchema(BaseModel):
    key: str
    name: str
    price: int
    depositPercent: int
    deposit: int
    durationMinutes: int
    description: str | None = None

    @classmethod
    def from_entity(cls, entry: SessionType, deposit: int) -> "SessionTypeSchema":
        return cls(
            key=entry.key,
            name=entry.display_name,
            price=entry.price,
            depositPercent=entry.deposit_percent,
            deposit=deposit,
            durationMinutes=entry.duration_minutes,
            description=entry.description,
        )


class BookingDataSchema(BaseModel):
    # all optional here so missing fields surface as a 400 from request validation
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    sessionType: str | None = None
    selectedSlot: str | None = None
    note: str | None = None


class InvoiceRequestSchema(BaseModel):
    bookingData: BookingDataSchema
    amount: int | None = None


class OpenBookingResponseSchema(BaseModel):
    success: bool = True
    bookingId: str
    invoiceId: str
    pageUrl: str
    amount: int
    status: str


class InvoiceResponseSchema(BaseModel):
    success: bool = True
    invoiceId: str
    pageUrl: str


class BookingStatusSchema(BaseModel):
    invoiceId: str
    status: str
    sessionType: str
    selectedSlot: datetime
    amount: int
    addToCalendarUrl: str | None = None


class BookingSchema(BaseModel):
    id: str
    invoiceId: str
    name: str
    email: str
    phone: str | None = None
    sessionType: str
    selectedSlot: datetime
    note: str | None = None
    status: str
    amount: int
    calendarEventId: str | None = None
    createdAt: datetime
    paidAt: datetime | None = None

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingSchema":
        return cls(
            id=booking.id,
            invoiceId=booking.invoice_id,
            name=booking.name,
            email=booking.email,
            phone=booking.phone,
            sessionType=booking.session_type,
            selectedSlot=booking.selected_slot,
            note=booking.note,
            status=booking.status.value,
            amount=booking.amount,
            calendarEventId=booking.calendar_event_id,
            createdAt=booking.created_at,
            paidAt=booking.paid_at,
        )


class BookingStatsSchema(BaseModel):
    total: int = 0
    pending: int = 0
    paid: int = 0
    failed: int = 0
    expired: int = 0


class BookingListResponseSchema(BaseModel):
    bookings: list[BookingSchema]
    stats: BookingStatsSchema


class VacationCreateSchema(BaseModel):
    startDate: date
    endDate: date
    reason: str | None = None


class VacationSchema(BaseModel):
    id: str
    startDate: date
    endDate: date
    reason: str | None = None
    calendarEventId: str | None = None

    @classmethod
    def from_entity(cls, block: VacationBlock) -> "VacationSchema":
        return cls(
            id=block.id,
            startDate=block.start_date,
            endDate=block.end_date,
            reason=block.reason,
            calendarEventId=block.calendar_event_id,
        )


class WorkingHoursSchema(BaseModel):
    start: int
    end: int


class LoginRequestSchema(BaseModel):
    username: str
    password: str


class LoginResponseSchema(BaseModel):
    success: bool = True
    token: str
