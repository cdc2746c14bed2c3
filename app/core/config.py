from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STUDIO_NAME: str = "Photo Studio"
    STUDIO_TIMEZONE: str = "Europe/Kyiv"
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    STORE_PROVIDER: str = "json"
    DATA_DIR: str = "./data"

    GOOGLE_CALENDAR_ID: str | None = None
    GOOGLE_CLIENT_EMAIL: str | None = None
    GOOGLE_PRIVATE_KEY: str | None = None

    SESSION_BLOCK_MINUTES: int = 120
    SESSION_ADVERTISED_MINUTES: int = 90
    BOOKING_BUFFER_MINUTES: int = 60
    AVAILABILITY_DEFAULT_DAYS: int = 21
    AVAILABILITY_MAX_DAYS: int = 90

    MONOBANK_TOKEN: str | None = None
    MONOBANK_API_URL: str = "https://api.monobank.ua"
    MONOBANK_PUBLIC_KEY: str | None = None
    PAYMENT_CURRENCY_CODE: int = 980
    INVOICE_VALIDITY_SECONDS: int = 3600
    DEPOSIT_OVERRIDE_AMOUNT: int | None = None

    TELEGRAM_BOT_TOKEN: str | None = None
    TELEGRAM_CHAT_ID: str | None = None
    TELEGRAM_API_URL: str = "https://api.telegram.org"
    NOTIFICATIONS_ENABLED: bool = True

    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str | None = None
    ADMIN_TOKEN_SECRET: str | None = None
    ADMIN_TOKEN_TTL_MINUTES: int = 720

    @property
    def is_dev(self) -> bool:
        return self.ENV.lower() in {"dev", "local"}


settings = Settings()
