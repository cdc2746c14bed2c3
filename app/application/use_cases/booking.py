from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Mapping
from zoneinfo import ZoneInfo

from app.application.exceptions import BookingNotFoundError, BookingNotPaidError
from app.application.ports.calendar import CalendarPort
from app.application.ports.payment_gateway import InvoiceRequest, PaymentGatewayPort
from app.application.ports.session_catalog import SessionCatalogPort
from app.application.ports.studio_store import BookingStorePort
from app.application.use_cases.send_notification import SendNotificationUseCase
from app.application.utils.ics import build_google_calendar_url, build_ics
from app.application.utils.notification_text import (
    format_payment_notification,
    format_session_event_description,
)
from app.application.utils.pipeline import StepPipeline, StepResult
from app.domain.entities.booking import Booking, BookingStatus

REQUIRED_FIELDS = ("name", "email", "sessionType", "selectedSlot")

# Provider statuses that end a payment attempt. created/processing/hold leave the booking pending.
PROVIDER_STATUS_MAP: dict[str, BookingStatus] = {
    "success": BookingStatus.PAID,
    "failure": BookingStatus.FAILED,
    "reversed": BookingStatus.FAILED,
    "expired": BookingStatus.EXPIRED,
}


@dataclass(frozen=True)
class BookingRequest:
    name: str
    email: str
    session_type: str
    selected_slot: datetime
    phone: str | None = None
    note: str | None = None


@dataclass(frozen=True)
class OpenedBooking:
    booking: Booking
    page_url: str


@dataclass(frozen=True)
class WebhookResolution:
    outcome: str  # "transitioned", "duplicate", "conflict", "ignored"
    booking: Booking
    side_effects: StepPipeline | None = None

    def run_side_effects(self) -> list[StepResult]:
        if self.side_effects is None:
            return []
        return self.side_effects.run()


def parse_booking_request(data: Mapping[str, Any], timezone: ZoneInfo) -> BookingRequest:
    """Validate visitor input before any external call. Raises ValueError."""
    missing = [field for field in REQUIRED_FIELDS if not str(data.get(field) or "").strip()]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")

    raw_slot = str(data["selectedSlot"]).strip()
    try:
        slot = datetime.fromisoformat(raw_slot.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError(f"selectedSlot is not an ISO timestamp: {raw_slot}")
    if slot.tzinfo is None:
        slot = slot.replace(tzinfo=timezone)

    email = str(data["email"]).strip()
    if "@" not in email:
        raise ValueError("email is not valid")

    return BookingRequest(
        name=str(data["name"]).strip(),
        email=email,
        session_type=str(data["sessionType"]).strip(),
        selected_slot=slot,
        phone=str(data.get("phone") or "").strip() or None,
        note=str(data.get("note") or "").strip() or None,
    )


class BookingUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        payments: PaymentGatewayPort,
        calendar: CalendarPort,
        notifications: SendNotificationUseCase,
        catalog: SessionCatalogPort,
        timezone: ZoneInfo,
        studio_name: str,
        public_base_url: str,
        currency_code: int = 980,
        invoice_validity_seconds: int = 3600,
        block_minutes: int = 120,
        advertised_minutes: int = 90,
        deposit_override: int | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._payments = payments
        self._calendar = calendar
        self._notifications = notifications
        self._catalog = catalog
        self._timezone = timezone
        self._studio_name = studio_name
        self._public_base_url = public_base_url.rstrip("/")
        self._currency_code = currency_code
        self._invoice_validity_seconds = invoice_validity_seconds
        self._block_minutes = block_minutes
        self._advertised_minutes = advertised_minutes
        self._deposit_override = deposit_override
        self._now = now or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def compute_deposit(self, session_type: str) -> int:
        entry = self._catalog.get_session_type(session_type)
        if entry is None:
            raise ValueError(f"Unknown session type: {session_type}")
        if self._deposit_override is not None:
            return self._deposit_override
        return entry.deposit_amount()

    def open_booking(self, request: BookingRequest, amount: int | None = None) -> OpenedBooking:
        """
        Create the invoice, then persist a pending booking keyed by its invoice id.
        Nothing is stored when invoice creation fails.
        """
        if amount is None:
            amount = self.compute_deposit(request.session_type)
        if amount <= 0:
            raise ValueError("amount must be positive")

        booking_id = uuid.uuid4().hex
        invoice = self._payments.create_invoice(
            InvoiceRequest(
                amount_minor_units=amount * 100,
                currency=self._currency_code,
                reference=f"booking-{booking_id}",
                description=f"{request.session_type} - {request.name}",
                redirect_url=f"{self._public_base_url}/booking/success",
                webhook_url=f"{self._public_base_url}/payment-webhook",
                validity_seconds=self._invoice_validity_seconds,
                basket_item_name=f"Photo session deposit: {request.session_type} ({self._studio_name})",
            )
        )

        booking = Booking(
            id=booking_id,
            invoice_id=invoice.invoice_id,
            name=request.name,
            email=request.email,
            phone=request.phone,
            session_type=request.session_type,
            selected_slot=request.selected_slot,
            note=request.note,
            amount=amount,
            created_at=self._now(),
        )
        try:
            self._store.add(booking)
        except Exception as e:
            self._logger.error(
                "Invoice opened but booking not stored",
                extra={"invoice_id": invoice.invoice_id, "booking_id": booking_id, "error": str(e)},
            )
            raise

        self._logger.info(
            "Pending booking created",
            extra={"invoice_id": invoice.invoice_id, "booking_id": booking_id, "status": booking.status.value},
        )
        return OpenedBooking(booking=booking, page_url=invoice.hosted_page_url)

    def resolve_webhook(self, invoice_id: str, provider_status: str) -> WebhookResolution:
        """
        Apply a provider notification. The status write is required and happens here;
        the calendar event and notification are returned as a pipeline for the caller to run.
        """
        target = PROVIDER_STATUS_MAP.get(provider_status)
        if target is None:
            booking = self._store.get_by_invoice_id(invoice_id)
            if booking is None:
                raise BookingNotFoundError(invoice_id)
            self._logger.info(
                "Non-terminal payment status, nothing to do",
                extra={"invoice_id": invoice_id, "status": provider_status},
            )
            return WebhookResolution(outcome="ignored", booking=booking)

        result = self._store.transition_status(invoice_id, target, self._now())
        if result is None:
            raise BookingNotFoundError(invoice_id)
        before, after = result

        if before.status is BookingStatus.PENDING and after.status is target:
            self._logger.info(
                "Booking status changed",
                extra={"invoice_id": invoice_id, "booking_id": after.id, "status": target.value},
            )
            side_effects = self._payment_confirmed_pipeline(after) if target is BookingStatus.PAID else None
            return WebhookResolution(outcome="transitioned", booking=after, side_effects=side_effects)

        if before.status is target:
            self._logger.info(
                "Booking already %s, skip status change",
                target.value,
                extra={"invoice_id": invoice_id, "booking_id": before.id, "status": target.value},
            )
            # a repeated success retries a missing calendar event; the notification went out once already
            side_effects = self._calendar_repair_pipeline(before) if target is BookingStatus.PAID else None
            return WebhookResolution(outcome="duplicate", booking=before, side_effects=side_effects)

        self._logger.warning(
            "Conflicting terminal payment status ignored, first status wins",
            extra={
                "invoice_id": invoice_id,
                "booking_id": before.id,
                "status": f"{before.status.value}->{provider_status}",
            },
        )
        return WebhookResolution(outcome="conflict", booking=before)

    def get_booking(self, invoice_id: str) -> Booking:
        booking = self._store.get_by_invoice_id(invoice_id)
        if booking is None:
            raise BookingNotFoundError(invoice_id)
        return booking

    def list_bookings(
        self, status: BookingStatus | None = None, search: str | None = None
    ) -> tuple[list[Booking], dict[str, int]]:
        bookings = self._store.list_bookings(status=status, search=search)
        everything = bookings if status is None and not search else self._store.list_bookings()
        stats = {"total": len(everything)}
        for value in BookingStatus:
            stats[value.value] = sum(1 for b in everything if b.status is value)
        return bookings, stats

    def add_to_calendar_url(self, booking: Booking) -> str:
        return build_google_calendar_url(
            title=self._session_title(booking),
            description=f"Photo session with {self._studio_name}",
            start=booking.selected_slot,
            end=booking.selected_slot + timedelta(minutes=self._advertised_minutes),
        )

    def calendar_file(self, invoice_id: str) -> str:
        booking = self.get_booking(invoice_id)
        if booking.status is not BookingStatus.PAID:
            raise BookingNotPaidError(invoice_id)
        return build_ics(
            uid=f"{booking.id}@{self._studio_name.lower().replace(' ', '-')}",
            title=self._session_title(booking),
            description=f"Photo session with {self._studio_name}",
            start=booking.selected_slot,
            end=booking.selected_slot + timedelta(minutes=self._advertised_minutes),
            product_name=self._studio_name,
            now=self._now(),
        )

    def _payment_confirmed_pipeline(self, booking: Booking) -> StepPipeline:
        pipeline = StepPipeline(
            "payment_confirmed",
            context={"invoice_id": booking.invoice_id, "booking_id": booking.id},
        )
        pipeline.add("calendar_event", lambda: self._create_session_event(booking.invoice_id))
        pipeline.add("notify", lambda: self._notify_paid(booking.invoice_id))
        return pipeline

    def _calendar_repair_pipeline(self, booking: Booking) -> StepPipeline:
        pipeline = StepPipeline(
            "payment_replayed",
            context={"invoice_id": booking.invoice_id, "booking_id": booking.id},
        )
        pipeline.add("calendar_event", lambda: self._create_session_event(booking.invoice_id))
        return pipeline

    def _create_session_event(self, invoice_id: str) -> None:
        booking = self.get_booking(invoice_id)
        if booking.calendar_event_id:
            self._logger.info(
                "Calendar event already exists, skip",
                extra={"invoice_id": invoice_id, "event_id": booking.calendar_event_id},
            )
            return

        event_id = self._calendar.create_event(
            summary=self._session_title(booking),
            description=format_session_event_description(booking, self._advertised_minutes, self._block_minutes),
            start=booking.selected_slot,
            end=booking.selected_slot + timedelta(minutes=self._block_minutes),
        )
        if self._store.attach_calendar_event(invoice_id, event_id):
            self._logger.info("Session added to calendar", extra={"invoice_id": invoice_id, "event_id": event_id})
            return

        # another delivery attached an event first; drop ours
        self._logger.warning("Duplicate session event created, removing", extra={"invoice_id": invoice_id, "event_id": event_id})
        self._calendar.delete_event(event_id)

    def _notify_paid(self, invoice_id: str) -> None:
        booking = self.get_booking(invoice_id)
        self._notifications.execute(format_payment_notification(booking, self._timezone))

    def _session_title(self, booking: Booking) -> str:
        return f"Photo session: {booking.session_type}"
