class ConfigurationError(RuntimeError):
    """Raised when a provider is used without the credentials or ids it needs."""
    pass


class CalendarUpstreamError(RuntimeError):
    """Raised when the calendar provider fails (timeouts, network errors, API errors)."""
    pass


class PaymentUpstreamError(RuntimeError):
    """Raised when the payment provider fails or rejects an invoice."""

    def __init__(self, message: str, detail: object | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.detail = detail
        self.status_code = status_code


class BookingNotFoundError(LookupError):
    """Raised when no booking matches the given invoice id."""
    pass


class VacationNotFoundError(LookupError):
    """Raised when no vacation block matches the given id."""
    pass


class BookingNotPaidError(RuntimeError):
    """Raised when a paid-only artefact is requested for an unpaid booking."""
    pass


class DuplicateInvoiceError(RuntimeError):
    """Raised when a booking is stored with an invoice id that already exists."""
    pass


class AuthenticationError(RuntimeError):
    """Raised on bad admin credentials or an invalid/expired session token."""
    pass
