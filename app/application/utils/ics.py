from __future__ import annotations

from datetime import datetime, timezone
from urllib.parse import urlencode

GOOGLE_TEMPLATE_URL = "https://calendar.google.com/calendar/render"


def _utc_stamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def build_google_calendar_url(
    title: str,
    description: str,
    start: datetime,
    end: datetime,
    location: str | None = None,
) -> str:
    params = {
        "action": "TEMPLATE",
        "text": title,
        "details": description,
        "dates": f"{_utc_stamp(start)}/{_utc_stamp(end)}",
    }
    if location:
        params["location"] = location
    return f"{GOOGLE_TEMPLATE_URL}?{urlencode(params)}"


def build_ics(
    uid: str,
    title: str,
    description: str,
    start: datetime,
    end: datetime,
    product_name: str,
    location: str | None = None,
    now: datetime | None = None,
) -> str:
    """Single-event iCalendar document with a 24h reminder."""
    stamp = _utc_stamp(now or datetime.now(timezone.utc))
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:-//{product_name}//Booking//EN",
        "BEGIN:VEVENT",
        f"UID:{uid}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{_utc_stamp(start)}",
        f"DTEND:{_utc_stamp(end)}",
        f"SUMMARY:{_escape_text(title)}",
        f"DESCRIPTION:{_escape_text(description)}",
    ]
    if location:
        lines.append(f"LOCATION:{_escape_text(location)}")
    lines += [
        "STATUS:CONFIRMED",
        "BEGIN:VALARM",
        "TRIGGER:-PT24H",
        "ACTION:DISPLAY",
        f"DESCRIPTION:{_escape_text(title)}",
        "END:VALARM",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"
