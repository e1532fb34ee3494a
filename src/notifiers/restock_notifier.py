# src/notifiers/restock_notifier.py

"""Formats restock events and hands them to the messenger."""

import html
import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.config.settings import Settings
from src.models.restock_event import RestockEvent

logger = logging.getLogger("restock_tracker.notifier")


class Messenger(Protocol):
    """Anything that can deliver a chat message."""

    @property
    def enabled(self) -> bool: ...

    def send(
        self,
        destination_id: str,
        text: str,
        *,
        no_link_preview: bool = True,
        fmt: str = "html",
    ) -> str | None: ...


def _resolve_zone(name: str) -> ZoneInfo | None:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; using local time", name)
        return None


def format_message(event: RestockEvent, detected_at: datetime) -> str:
    """Render the alert text (Telegram HTML subset)."""
    lines = [
        "🔔 RESTOCK ALERT 🔔",
        "",
        html.escape(event.name),
        "",
        f"<b>Units Available:</b> {event.units_available}",
        f"<b>Price:</b> {html.escape(str(event.price))}",
        "",
        f"URL: {html.escape(event.url)}",
        "",
        f"⏰ {detected_at.strftime('%Y-%m-%d %H:%M:%S %Z').rstrip()}",
    ]
    return "\n".join(lines)


class RestockNotifier:
    """Sends one message per restock event on the allow-list."""

    def __init__(
        self,
        messenger: Messenger,
        destination: str,
        allow_list: Iterable[str] = (),
        timezone: str = Settings.DEFAULT_TIMEZONE,
    ) -> None:
        self.messenger = messenger
        self.destination = (destination or "").strip()
        self.allow_list: frozenset[str] = frozenset(allow_list)
        self._zone = _resolve_zone(timezone)

    @property
    def configured(self) -> bool:
        return bool(self.destination) and self.messenger.enabled

    def select(self, events: Iterable[RestockEvent]) -> list[RestockEvent]:
        """Events whose SKU is allow-listed (all of them if none are)."""
        if not self.allow_list:
            return list(events)
        return [e for e in events if e.sku in self.allow_list]

    def _now(self) -> datetime:
        return datetime.now(self._zone) if self._zone else datetime.now()

    def notify(self, events: Iterable[RestockEvent]) -> int:
        """Deliver alerts one at a time; returns how many succeeded.

        A failed delivery is logged and does not stop the rest.
        """
        selected = self.select(events)
        if not selected:
            logger.info("No restock events to notify")
            return 0

        if not self.configured:
            logger.warning(
                "Messaging credentials not configured; skipping %d "
                "notification(s) (requires TELEGRAM_BOT_TOKEN + "
                "TELEGRAM_CHAT_ID)",
                len(selected),
            )
            return 0

        logger.info("Sending %d notification(s)", len(selected))
        sent = 0
        for event in selected:
            text = format_message(event, self._now())
            try:
                error = self.messenger.send(
                    self.destination,
                    text,
                    no_link_preview=True,
                    fmt="html",
                )
            except Exception as exc:
                error = str(exc) or type(exc).__name__
            if error:
                logger.error(
                    "Notification failed for %s (SKU: %s): %s",
                    event.name,
                    event.sku,
                    error,
                )
                continue
            sent += 1
            logger.info("Notification sent: %s", event.name)
        return sent
