from __future__ import annotations

import logging

import httpx


class TelegramClient:
    def __init__(self, bot_token: str, base_url: str = "https://api.telegram.org") -> None:
        self._send_endpoint = f"{base_url.rstrip('/')}/bot{bot_token}/sendMessage"
        self._client = httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def send_text(self, chat_id: str, text: str, parse_mode: str = "HTML") -> None:
        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": parse_mode,
            "disable_web_page_preview": True,
        }
        resp = self._client.post(self._send_endpoint, json=payload)
        if resp.status_code >= 400:
            try:
                error_json = resp.json()
                error_code = error_json.get("error_code")
                error_message = error_json.get("description")
            except Exception:
                error_code = None
                error_message = resp.text

            self._logger.error(
                "Telegram send failed",
                extra={
                    "status": resp.status_code,
                    "error_code": error_code,
                    "error": error_message,
                    "text_length": len(text),
                },
            )
            resp.raise_for_status()
