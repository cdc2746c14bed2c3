from __future__ import annotations

import logging

from app.application.ports.notification import NotificationPort


class MockNotifier(NotificationPort):
    def __init__(self) -> None:
        self.sent: list[str] = []
        self._logger = logging.getLogger(__name__)

    def send_message(self, text: str) -> bool:
        self.sent.append(text)
        self._logger.info("Mock notification", extra={"reason": text.splitlines()[0] if text else ""})
        return True
