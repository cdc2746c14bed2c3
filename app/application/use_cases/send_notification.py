from __future__ import annotations

import logging

from app.application.ports.notification import NotificationPort


class SendNotificationUseCase:
    def __init__(self, sink: NotificationPort, enabled: bool = True) -> None:
        self._sink = sink
        self._enabled = enabled
        self._logger = logging.getLogger(__name__)

    def execute(self, text: str) -> bool:
        """Best-effort send. Returns True if delivered; never raises."""
        if not self._enabled:
            self._logger.info("NOTIFICATIONS_ENABLED=false -> skipping send", extra={"reason": "disabled"})
            return False
        try:
            sent = self._sink.send_message(text)
        except Exception as e:
            self._logger.error("Notification dispatch failed", extra={"error": str(e)})
            return False
        if not sent:
            self._logger.warning("Notification not delivered")
        return bool(sent)
