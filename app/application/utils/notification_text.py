from __future__ import annotations

from datetime import tzinfo
from html import escape

from app.domain.entities.booking import Booking


def format_payment_notification(booking: Booking, tz: tzinfo, currency_label: str = "UAH") -> str:
    """Telegram HTML message sent once a deposit is confirmed."""
    slot = booking.selected_slot.astimezone(tz)
    lines = [
        "<b>Deposit paid, booking confirmed</b>",
        "",
        f"Client: {escape(booking.name)}",
        f"Email: {escape(booking.email)}",
    ]
    if booking.phone:
        lines.append(f"Phone: {escape(booking.phone)}")
    lines += [
        f"Session: {escape(booking.session_type)}",
        f"When: {slot.strftime('%A, %d %B %Y')} at {slot.strftime('%H:%M')}",
        f"Deposit: {booking.amount} {currency_label}",
    ]
    if booking.note:
        lines += ["", f"Note: {escape(booking.note)}"]
    return "\n".join(lines)


def format_session_event_description(booking: Booking, advertised_minutes: int, block_minutes: int) -> str:
    return "\n".join(
        [
            f"Client: {booking.name}",
            f"Email: {booking.email}",
            f"Phone: {booking.phone or 'not provided'}",
            f"Note: {booking.note or '-'}",
            "",
            f"Session length: ~{advertised_minutes} min",
            f"Blocked: {block_minutes} min including travel",
            f"Invoice: {booking.invoice_id}",
        ]
    )
