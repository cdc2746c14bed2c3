from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.application.ports.calendar import CalendarPort
from app.application.ports.notification import NotificationPort
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.application.ports.session_catalog import SessionCatalogPort
from app.application.ports.studio_store import BookingStorePort, SettingsStorePort, VacationStorePort
from app.application.use_cases.admin_auth import AdminAuthUseCase
from app.application.use_cases.availability import GetAvailabilityUseCase
from app.application.use_cases.booking import BookingUseCase
from app.application.use_cases.send_notification import SendNotificationUseCase
from app.application.use_cases.vacation import VacationUseCase
from app.application.use_cases.working_hours import WorkingHoursUseCase
from app.infrastructure.calendar.google_calendar import GoogleCalendar
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.catalog.session_catalog_store import SessionCatalogStore
from app.infrastructure.payments.mock_payments import MockPaymentGateway
from app.infrastructure.payments.monobank_client import MonobankGateway
from app.infrastructure.store.json_store import JsonBookingStore, JsonSettingsStore, JsonVacationStore
from app.infrastructure.store.memory_store import MemoryBookingStore, MemorySettingsStore, MemoryVacationStore
from app.infrastructure.telegram.mock_notifier import MockNotifier
from app.infrastructure.telegram.telegram_client import TelegramClient
from app.infrastructure.telegram.telegram_notifier import TelegramNotifier


logger = logging.getLogger(__name__)

_booking_store: BookingStorePort | None = None
_vacation_store: VacationStorePort | None = None
_settings_store: SettingsStorePort | None = None


def _use_memory_store() -> bool:
    return settings.STORE_PROVIDER.lower() == "memory"


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        _booking_store = MemoryBookingStore() if _use_memory_store() else JsonBookingStore(settings.DATA_DIR)
    return _booking_store


def get_vacation_store() -> VacationStorePort:
    global _vacation_store
    if _vacation_store is None:
        _vacation_store = MemoryVacationStore() if _use_memory_store() else JsonVacationStore(settings.DATA_DIR)
    return _vacation_store


def get_settings_store() -> SettingsStorePort:
    global _settings_store
    if _settings_store is None:
        _settings_store = MemorySettingsStore() if _use_memory_store() else JsonSettingsStore(settings.DATA_DIR)
    return _settings_store


def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.STUDIO_TIMEZONE)


@lru_cache
def get_calendar() -> CalendarPort:
    calendar = GoogleCalendar()
    if not calendar.is_configured() and settings.is_dev:
        logger.info("Using MockCalendar (Google credentials missing, ENV=dev/local)")
        return MockCalendar()
    return calendar


@lru_cache
def get_payment_gateway() -> PaymentGatewayPort:
    if not settings.MONOBANK_TOKEN and settings.is_dev:
        logger.info("Using MockPaymentGateway (MONOBANK_TOKEN missing, ENV=dev/local)")
        return MockPaymentGateway()
    return MonobankGateway()


@lru_cache
def get_notifier() -> NotificationPort:
    if not settings.TELEGRAM_BOT_TOKEN:
        if settings.is_dev:
            logger.info("Using MockNotifier (TELEGRAM_BOT_TOKEN missing, ENV=dev/local)")
            return MockNotifier()
        return TelegramNotifier(client=None, chat_id=settings.TELEGRAM_CHAT_ID)
    client = TelegramClient(bot_token=settings.TELEGRAM_BOT_TOKEN, base_url=settings.TELEGRAM_API_URL)
    return TelegramNotifier(client=client, chat_id=settings.TELEGRAM_CHAT_ID)


def get_session_catalog() -> SessionCatalogPort:
    return SessionCatalogStore()


def get_working_hours_use_case() -> WorkingHoursUseCase:
    return WorkingHoursUseCase(store=get_settings_store())


def get_availability_use_case() -> GetAvailabilityUseCase:
    return GetAvailabilityUseCase(
        calendar=get_calendar(),
        working_hours=get_working_hours_use_case(),
        vacations=get_vacation_store(),
        timezone=get_timezone(),
        block_minutes=settings.SESSION_BLOCK_MINUTES,
        buffer_minutes=settings.BOOKING_BUFFER_MINUTES,
    )


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(
        store=get_booking_store(),
        payments=get_payment_gateway(),
        calendar=get_calendar(),
        notifications=SendNotificationUseCase(sink=get_notifier(), enabled=settings.NOTIFICATIONS_ENABLED),
        catalog=get_session_catalog(),
        timezone=get_timezone(),
        studio_name=settings.STUDIO_NAME,
        public_base_url=settings.PUBLIC_BASE_URL,
        currency_code=settings.PAYMENT_CURRENCY_CODE,
        invoice_validity_seconds=settings.INVOICE_VALIDITY_SECONDS,
        block_minutes=settings.SESSION_BLOCK_MINUTES,
        advertised_minutes=settings.SESSION_ADVERTISED_MINUTES,
        deposit_override=settings.DEPOSIT_OVERRIDE_AMOUNT,
    )


def get_vacation_use_case() -> VacationUseCase:
    return VacationUseCase(store=get_vacation_store(), calendar=get_calendar())


def get_admin_auth_use_case() -> AdminAuthUseCase:
    return AdminAuthUseCase(
        username=settings.ADMIN_USERNAME,
        password=settings.ADMIN_PASSWORD,
        secret=settings.ADMIN_TOKEN_SECRET,
        ttl_minutes=settings.ADMIN_TOKEN_TTL_MINUTES,
    )
