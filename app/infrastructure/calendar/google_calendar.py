from __future__ import annotations

import logging
import threading
from datetime import date, datetime

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.application.exceptions import CalendarUpstreamError, ConfigurationError
from app.application.ports.calendar import CalendarPort
from app.core.config import settings
from app.domain.entities.schedule import BusyInterval

SCOPES = ["https://www.googleapis.com/auth/calendar"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class GoogleCalendar(CalendarPort):
    def __init__(
        self,
        calendar_id: str | None = None,
        client_email: str | None = None,
        private_key: str | None = None,
        timezone: str | None = None,
    ) -> None:
        self._calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID
        self._client_email = client_email or settings.GOOGLE_CLIENT_EMAIL
        # keys pasted into .env usually carry literal "\n"
        raw_key = private_key or settings.GOOGLE_PRIVATE_KEY
        self._private_key = raw_key.replace("\\n", "\n") if raw_key else None
        self._timezone = timezone or settings.STUDIO_TIMEZONE
        self._credentials = None
        self._credentials_lock = threading.Lock()
        # the discovery client wraps httplib2, which is not thread-safe
        self._local = threading.local()
        self._logger = logging.getLogger(__name__)

    def is_configured(self) -> bool:
        return bool(self._calendar_id and self._client_email and self._private_key)

    def query_busy(self, time_min: datetime, time_max: datetime) -> list[BusyInterval]:
        service = self._get_service()
        body = {
            "timeMin": time_min.isoformat(),
            "timeMax": time_max.isoformat(),
            "items": [{"id": self._calendar_id}],
        }
        try:
            response = service.freebusy().query(body=body).execute()
        except HttpError as e:
            raise CalendarUpstreamError(f"Free/busy query failed: {e.resp.status}") from e
        except Exception as e:
            raise CalendarUpstreamError(f"Free/busy query failed: {e}") from e

        calendar = (response.get("calendars") or {}).get(self._calendar_id) or {}
        if calendar.get("errors"):
            reasons = ", ".join(err.get("reason", "unknown") for err in calendar["errors"])
            raise CalendarUpstreamError(f"Calendar {self._calendar_id} not readable: {reasons}")

        intervals: list[BusyInterval] = []
        for busy in calendar.get("busy", []):
            try:
                intervals.append(
                    BusyInterval(
                        start=datetime.fromisoformat(busy["start"].replace("Z", "+00:00")),
                        end=datetime.fromisoformat(busy["end"].replace("Z", "+00:00")),
                    )
                )
            except (KeyError, ValueError, AttributeError):
                self._logger.warning("Skipping malformed busy interval", extra={"reason": str(busy)})
        return intervals

    def create_event(
        self,
        summary: str,
        start: datetime | date,
        end: datetime | date,
        description: str | None = None,
        all_day: bool = False,
    ) -> str:
        service = self._get_service()
        event: dict = {"summary": summary, "description": description or ""}
        if all_day:
            event["start"] = {"date": _as_date(start).isoformat()}
            event["end"] = {"date": _as_date(end).isoformat()}
            event["colorId"] = "11"
        else:
            event["start"] = {"dateTime": start.isoformat(), "timeZone": self._timezone}
            event["end"] = {"dateTime": end.isoformat(), "timeZone": self._timezone}
            event["reminders"] = {"useDefault": False, "overrides": [{"method": "popup", "minutes": 30}]}

        try:
            created = service.events().insert(calendarId=self._calendar_id, body=event).execute()
        except HttpError as e:
            raise CalendarUpstreamError(f"Event insert failed: {e.resp.status}") from e
        except Exception as e:
            raise CalendarUpstreamError(f"Event insert failed: {e}") from e

        event_id = created.get("id")
        if not event_id:
            raise CalendarUpstreamError("No event ID returned from Google Calendar")
        self._logger.info("Calendar event created", extra={"event_id": event_id})
        return str(event_id)

    def delete_event(self, event_id: str) -> bool:
        service = self._get_service()
        try:
            service.events().delete(calendarId=self._calendar_id, eventId=event_id).execute()
        except HttpError as e:
            if e.resp.status in (404, 410):
                return False
            raise CalendarUpstreamError(f"Event delete failed: {e.resp.status}") from e
        except Exception as e:
            raise CalendarUpstreamError(f"Event delete failed: {e}") from e

        self._logger.info("Calendar event deleted", extra={"event_id": event_id})
        return True

    def _get_service(self):
        if not self.is_configured():
            raise ConfigurationError(
                "Google Calendar is not configured. Set GOOGLE_CALENDAR_ID, GOOGLE_CLIENT_EMAIL and GOOGLE_PRIVATE_KEY."
            )
        service = getattr(self._local, "service", None)
        if service is None:
            service = build("calendar", "v3", credentials=self._get_credentials(), cache_discovery=False)
            self._local.service = service
        return service

    def _get_credentials(self):
        with self._credentials_lock:
            if self._credentials is None:
                self._credentials = service_account.Credentials.from_service_account_info(
                    {
                        "type": "service_account",
                        "client_email": self._client_email,
                        "private_key": self._private_key,
                        "token_uri": TOKEN_URI,
                    },
                    scopes=SCOPES,
                )
            return self._credentials


def _as_date(value: datetime | date) -> date:
    return value.date() if isinstance(value, datetime) else value
