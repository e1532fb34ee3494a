# src/services/tracker.py

"""Runs one negotiate → fetch → diff → notify → persist cycle."""

import logging
from dataclasses import dataclass, field

from curl_cffi import requests as curl_requests

from src.config.settings import TrackerConfig
from src.models.restock_event import RestockEvent
from src.notifiers.restock_notifier import Messenger, RestockNotifier
from src.notifiers.telegram import TelegramMessenger
from src.scrapers.catalog_fetcher import CatalogFetcher
from src.scrapers.session_negotiator import SessionNegotiator
from src.services.restock_detector import detect
from src.storage.cookie_cache import CookieCache
from src.storage.snapshot_store import SnapshotStore

logger = logging.getLogger("restock_tracker.tracker")


@dataclass
class RunResult:
    """Outcome of a completed tracker run."""

    product_count: int = 0
    events: list[RestockEvent] = field(
        default_factory=lambda: list[RestockEvent]()
    )
    notified: int = 0
    saved: bool = False


class RestockTracker:
    """Composes the tracker components for a single run.

    Fatal errors (:class:`TrackerError` subclasses) propagate to the
    caller.  The snapshot is written only after the fetch succeeded, so
    an aborted run leaves the previous state untouched.
    """

    def __init__(
        self,
        config: TrackerConfig,
        *,
        messenger: Messenger | None = None,
        session: curl_requests.Session | None = None,
        use_cookie_cache: bool = True,
        dry_run: bool = False,
    ) -> None:
        self.config = config
        self.dry_run = dry_run
        self.store = SnapshotStore(config.state_file_path)
        cookie_cache = (
            CookieCache(config.cookie_file_path)
            if use_cookie_cache and config.cookie_file_path
            else None
        )
        self.negotiator = SessionNegotiator(
            config.region_id,
            session=session,
            cookie_cache=cookie_cache,
        )
        self.notifier = RestockNotifier(
            messenger or TelegramMessenger(config.messaging_credential),
            config.messaging_destination,
            allow_list=config.allow_list,
            timezone=config.timezone,
        )

    def run(self) -> RunResult:
        """Execute the pipeline once.

        Raises:
            TransportError, SessionError, ResponseFormatError
        """
        logger.info("Starting stock check run")
        result = RunResult()

        context = self.negotiator.negotiate()
        current = CatalogFetcher(context).fetch()
        result.product_count = len(current)

        if not current:
            logger.warning("No stock data retrieved; keeping previous state")
            return result

        previous = self.store.load()
        result.events = detect(current, previous)

        if self.dry_run:
            for event in self.notifier.select(result.events):
                logger.info(
                    "[dry-run] Would notify: %s (SKU: %s, units: %d)",
                    event.name,
                    event.sku,
                    event.units_available,
                )
            logger.info("[dry-run] State file left unchanged")
            return result

        result.notified = self.notifier.notify(result.events)

        self.store.save(current)
        result.saved = True

        logger.info(
            "Stock check completed. Found %d restocked item(s).",
            len(result.events),
        )
        return result
