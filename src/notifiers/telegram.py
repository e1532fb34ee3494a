# src/notifiers/telegram.py

"""Telegram Bot API messenger."""

import logging
from typing import Literal

from curl_cffi import requests as curl_requests

from src.config.settings import Settings

logger = logging.getLogger("restock_tracker.telegram")

MessageFormat = Literal["plain", "html"]


class TelegramMessenger:
    """Sends text messages through the Telegram ``sendMessage`` method.

    ``send`` never raises for a delivery problem; it returns a short
    diagnostic string instead so callers can log it and move on.
    """

    def __init__(
        self,
        token: str,
        session: curl_requests.Session | None = None,
        timeout: int = Settings.REQUEST_TIMEOUT,
    ) -> None:
        self.token = (token or "").strip()
        self.session = session or curl_requests.Session()
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.token)

    def send(
        self,
        destination_id: str,
        text: str,
        *,
        no_link_preview: bool = True,
        fmt: MessageFormat = "html",
    ) -> str | None:
        """Deliver *text* to *destination_id*.

        Returns:
            ``None`` on success, otherwise a diagnostic description.
        """
        if not self.enabled:
            return "Telegram bot token is not configured"

        payload: dict[str, str] = {
            "chat_id": destination_id,
            "text": text,
            "disable_web_page_preview": "true" if no_link_preview else "false",
        }
        if fmt == "html":
            payload["parse_mode"] = "HTML"

        url = Settings.TELEGRAM_API_URL.format(token=self.token)
        try:
            resp = self.session.post(url, data=payload, timeout=self.timeout)
        except Exception as exc:
            logger.debug("Telegram transport error", exc_info=True)
            return f"Telegram request failed: {exc}"

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if resp.status_code == 200 and isinstance(body, dict) and body.get("ok"):
            return None

        description = (
            body.get("description") if isinstance(body, dict) else None
        )
        return description or f"Telegram returned HTTP {resp.status_code}"
