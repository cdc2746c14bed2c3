from __future__ import annotations

import logging

from app.application.ports.notification import NotificationPort
from app.infrastructure.telegram.telegram_client import TelegramClient


class TelegramNotifier(NotificationPort):
    def __init__(self, client: TelegramClient | None, chat_id: str | None) -> None:
        self._client = client
        self._chat_id = chat_id
        self._logger = logging.getLogger(__name__)

    def is_configured(self) -> bool:
        return self._client is not None and bool(self._chat_id)

    def send_message(self, text: str) -> bool:
        if not self.is_configured():
            self._logger.warning("Telegram bot is not configured. Skipping notification.")
            return False
        self._client.send_text(chat_id=self._chat_id, text=text)
        return True
