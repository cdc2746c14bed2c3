from __future__ import annotations

import base64
from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from app.application.exceptions import CalendarUpstreamError, PaymentUpstreamError
from app.application.ports.calendar import CalendarPort
from app.application.ports.notification import NotificationPort
from app.application.ports.payment_gateway import Invoice, InvoiceRequest, PaymentGatewayPort
from app.application.use_cases.booking import BookingRequest, BookingUseCase
from app.application.use_cases.send_notification import SendNotificationUseCase
from app.domain.entities.schedule import BusyInterval
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.catalog.session_catalog_store import SessionCatalogStore
from app.infrastructure.payments.mock_payments import MockPaymentGateway
from app.infrastructure.store.memory_store import MemoryBookingStore
from app.infrastructure.telegram.mock_notifier import MockNotifier

TZ = ZoneInfo("Europe/Kyiv")
# Wednesday; "tomorrow" is Thursday 2025-01-09
NOW = datetime(2025, 1, 8, 10, 0, tzinfo=TZ)


class FailingCalendar(CalendarPort):
    """Calendar whose every call raises, counting attempts."""

    def __init__(self) -> None:
        self.create_calls = 0
        self.delete_calls = 0

    def query_busy(self, time_min: datetime, time_max: datetime) -> list[BusyInterval]:
        raise CalendarUpstreamError("calendar unreachable")

    def create_event(self, summary, start, end, description=None, all_day=False) -> str:
        self.create_calls += 1
        raise CalendarUpstreamError("calendar unreachable")

    def delete_event(self, event_id: str) -> bool:
        self.delete_calls += 1
        raise CalendarUpstreamError("calendar unreachable")


class CountingCalendar(MockCalendar):
    def __init__(self) -> None:
        super().__init__()
        self.create_calls = 0

    def create_event(self, summary, start, end, description=None, all_day=False) -> str:
        self.create_calls += 1
        return super().create_event(summary, start, end, description=description, all_day=all_day)


class FailingPaymentGateway(PaymentGatewayPort):
    def create_invoice(self, request: InvoiceRequest) -> Invoice:
        raise PaymentUpstreamError("Failed to create invoice", detail={"errText": "rejected"}, status_code=400)


class ExplodingNotifier(NotificationPort):
    def __init__(self) -> None:
        self.calls = 0

    def send_message(self, text: str) -> bool:
        self.calls += 1
        raise RuntimeError("telegram down")


def make_booking_use_case(
    store=None,
    payments=None,
    calendar=None,
    notifier=None,
    deposit_override=None,
) -> BookingUseCase:
    return BookingUseCase(
        store=store if store is not None else MemoryBookingStore(),
        payments=payments if payments is not None else MockPaymentGateway(),
        calendar=calendar if calendar is not None else CountingCalendar(),
        notifications=SendNotificationUseCase(sink=notifier if notifier is not None else MockNotifier()),
        catalog=SessionCatalogStore(),
        timezone=TZ,
        studio_name="Test Studio",
        public_base_url="https://studio.example/",
        block_minutes=120,
        advertised_minutes=90,
        deposit_override=deposit_override,
        now=lambda: NOW,
    )


def make_request(**overrides) -> BookingRequest:
    data = {
        "name": "Olena",
        "email": "olena@example.com",
        "session_type": "portrait",
        "selected_slot": datetime(2025, 1, 13, 10, 0, tzinfo=TZ),
        "phone": "+380501112233",
        "note": None,
    }
    data.update(overrides)
    return BookingRequest(**data)


@pytest.fixture
def tz() -> ZoneInfo:
    return TZ


@pytest.fixture
def booking_store() -> MemoryBookingStore:
    return MemoryBookingStore()


@pytest.fixture
def calendar() -> CountingCalendar:
    return CountingCalendar()


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def payments() -> MockPaymentGateway:
    return MockPaymentGateway()


@pytest.fixture
def booking_use_case(booking_store, payments, calendar, notifier) -> BookingUseCase:
    return make_booking_use_case(store=booking_store, payments=payments, calendar=calendar, notifier=notifier)


def day_at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=TZ)


def sign_body(key: ec.EllipticCurvePrivateKey, body: bytes) -> str:
    """X-Sign header value for a raw webhook body."""
    return base64.b64encode(key.sign(body, ec.ECDSA(hashes.SHA256()))).decode("ascii")


@pytest.fixture(scope="session")
def signing_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def public_key_b64(signing_key) -> str:
    pem = signing_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(pem).decode("ascii")
