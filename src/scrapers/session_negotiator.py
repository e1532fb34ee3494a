# src/scrapers/session_negotiator.py

"""Establishes a store-scoped storefront session."""

import time

from curl_cffi import requests as curl_requests

from src.models.session_context import SessionContext
from src.scrapers.errors import TrackerError
from src.scrapers.session_info import parse_session_token
from src.scrapers.storefront_client import StorefrontClient
from src.storage.cookie_cache import CookieCache


class SessionNegotiator(StorefrontClient):
    """Runs the three-step handshake the catalog API requires.

    Stock and prices are region-scoped, so every run must:

    1. GET the category page to pick up baseline cookies,
    2. GET ``user/info.js`` and pull the ``tid`` token out of it,
    3. PUT the store preference with that token attached.

    All three share one cookie jar.  When a fresh cookie cache is
    available step 1 is skipped; steps 2 and 3 always run.
    """

    def __init__(
        self,
        region_id: str,
        session: curl_requests.Session | None = None,
        cookie_cache: CookieCache | None = None,
    ) -> None:
        super().__init__("session", session)
        self.region_id = region_id
        self.cookie_cache = cookie_cache

    def warm_up(self) -> None:
        """Step 1: fetch the human-facing category page for cookies."""
        self.logger.info(
            "Initializing session: fetching %s",
            self.settings.CATEGORY_PAGE_URL,
        )
        self._request(
            "GET",
            self.settings.CATEGORY_PAGE_URL,
            headers={"Accept": "text/html,application/xhtml+xml,*/*"},
        )

    def fetch_token(self) -> str:
        """Step 2: read the session script and extract ``tid``."""
        resp = self._request(
            "GET",
            self.settings.SESSION_INFO_URL,
            params={"_v": str(int(time.time()))},
        )
        tid = parse_session_token(resp.text)
        self.logger.info("Extracted tid: %s", tid)
        return tid

    def select_store(self, tid: str) -> None:
        """Step 3: pin the session to ``region_id``."""
        self.logger.info("Setting store preference: %s", self.region_id)
        self._request(
            "PUT",
            self.settings.PREFERENCES_URL,
            headers={
                "Content-Type": "application/json",
                "tid": tid,
            },
            json={"data": {"store": self.region_id}},
        )

    def negotiate(self) -> SessionContext:
        """Run the handshake and return an authenticated context.

        Raises:
            TransportError: Any step failed at the HTTP level.
            SessionError: The token could not be extracted.
        """
        restored = (
            self.cookie_cache.restore(self.session)
            if self.cookie_cache
            else False
        )
        if restored:
            self.logger.info("Reusing cached cookies; skipping warm-up")
        else:
            self.warm_up()

        try:
            tid = self.fetch_token()
            self.select_store(tid)
        except TrackerError:
            # Cached cookies may be what broke the handshake
            if restored and self.cookie_cache:
                self.cookie_cache.discard()
            raise

        if self.cookie_cache:
            self.cookie_cache.persist(self.session)

        return SessionContext(
            session=self.session,
            tid=tid,
            store_id=self.region_id,
        )
