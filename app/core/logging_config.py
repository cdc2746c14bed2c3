import logging

CONTEXT_KEYS = ("invoice_id", "booking_id", "vacation_id", "event_id", "status", "step", "reason", "error")

# third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "googleapiclient.discovery", "googleapiclient.discovery_cache")


class ContextFormatter(logging.Formatter):
    """Appends booking context passed via `extra=` as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = [
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(context)}" if context else base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
