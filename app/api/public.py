from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response

from app.api.errors import error_response
from app.api.schemas import (
    AvailabilityResponseSchema,
    BookingDataSchema,
    BookingStatusSchema,
    InvoiceRequestSchema,
    InvoiceResponseSchema,
    OpenBookingResponseSchema,
    SessionTypeSchema,
    TimeSlotSchema,
)
from app.application.exceptions import (
    BookingNotFoundError,
    BookingNotPaidError,
    CalendarUpstreamError,
    ConfigurationError,
    PaymentUpstreamError,
)
from app.application.ports.session_catalog import SessionCatalogPort
from app.application.use_cases.availability import GetAvailabilityUseCase
from app.application.use_cases.booking import BookingUseCase, parse_booking_request
from app.core.config import settings
from app.wiring.dependencies import (
    get_availability_use_case,
    get_booking_use_case,
    get_session_catalog,
    get_timezone,
)


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/availability", response_model=AvailabilityResponseSchema)
def availability(
    days: int = Query(settings.AVAILABILITY_DEFAULT_DAYS, ge=1, le=settings.AVAILABILITY_MAX_DAYS),
    uc: GetAvailabilityUseCase = Depends(get_availability_use_case),
):
    try:
        slots = uc.execute(days)
    except ConfigurationError as e:
        logger.error("Availability unavailable: calendar not configured", extra={"error": str(e)})
        return error_response(500, "Calendar is not configured", str(e))
    except CalendarUpstreamError as e:
        logger.error("Error fetching availability", extra={"error": str(e)})
        return error_response(500, "Failed to fetch availability", str(e))

    return AvailabilityResponseSchema(slots=[TimeSlotSchema.from_entity(slot) for slot in slots])


@router.get("/session-types", response_model=list[SessionTypeSchema])
def session_types(
    catalog: SessionCatalogPort = Depends(get_session_catalog),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    return [
        SessionTypeSchema.from_entity(entry, deposit=uc.compute_deposit(entry.key))
        for entry in catalog.list_session_types()
    ]


@router.post("/bookings", response_model=OpenBookingResponseSchema)
def open_booking(
    req: BookingDataSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        booking_request = parse_booking_request(req.model_dump(), get_timezone())
        opened = uc.open_booking(booking_request)
    except ValueError as e:
        return error_response(400, str(e))
    except ConfigurationError as e:
        return error_response(500, str(e))
    except PaymentUpstreamError as e:
        return error_response(500, str(e), e.detail)
    except Exception as e:
        logger.exception("Error processing booking", extra={"error": str(e)})
        return error_response(500, "Failed to process booking", str(e))

    return OpenBookingResponseSchema(
        bookingId=opened.booking.id,
        invoiceId=opened.booking.invoice_id,
        pageUrl=opened.page_url,
        amount=opened.booking.amount,
        status=opened.booking.status.value,
    )


@router.post("/invoices", response_model=InvoiceResponseSchema)
def create_invoice(
    req: InvoiceRequestSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        booking_request = parse_booking_request(req.bookingData.model_dump(), get_timezone())
        opened = uc.open_booking(booking_request, amount=req.amount)
    except ValueError as e:
        return error_response(400, str(e))
    except ConfigurationError as e:
        return error_response(500, str(e))
    except PaymentUpstreamError as e:
        return error_response(500, str(e), e.detail)
    except Exception as e:
        logger.exception("Error creating invoice", extra={"error": str(e)})
        return error_response(500, "Internal server error", str(e))

    return InvoiceResponseSchema(invoiceId=opened.booking.invoice_id, pageUrl=opened.page_url)


@router.get("/bookings/{invoice_id}", response_model=BookingStatusSchema)
def booking_status(invoice_id: str, uc: BookingUseCase = Depends(get_booking_use_case)):
    try:
        booking = uc.get_booking(invoice_id)
    except BookingNotFoundError:
        return error_response(404, "Booking not found")

    return BookingStatusSchema(
        invoiceId=booking.invoice_id,
        status=booking.status.value,
        sessionType=booking.session_type,
        selectedSlot=booking.selected_slot,
        amount=booking.amount,
        addToCalendarUrl=uc.add_to_calendar_url(booking),
    )


@router.get("/bookings/{invoice_id}/calendar.ics")
def booking_calendar_file(invoice_id: str, uc: BookingUseCase = Depends(get_booking_use_case)) -> Response:
    try:
        content = uc.calendar_file(invoice_id)
    except BookingNotFoundError:
        return error_response(404, "Booking not found")
    except BookingNotPaidError:
        return error_response(409, "Booking is not paid yet")

    return Response(
        content=content,
        media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="photo-session.ics"'},
    )
