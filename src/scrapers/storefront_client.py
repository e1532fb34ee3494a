# src/scrapers/storefront_client.py

"""Shared HTTP plumbing for every storefront call."""

import logging
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.scrapers.errors import TransportError


class StorefrontClient:
    """Base class for components talking to the storefront.

    Owns a single ``curl_cffi`` session so the cookie jar and browser
    fingerprint stay identical across every step of a run.  There is no
    retry: a failed call raises :class:`TransportError` and the next
    scheduled run starts over.
    """

    def __init__(
        self,
        component: str,
        session: curl_requests.Session | None = None,
    ) -> None:
        self.component = component
        self.logger = logging.getLogger(
            f"restock_tracker.{component}"
        )
        self.settings = Settings()
        self.session = session or curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> curl_requests.Response:
        """Issue one request on the shared session.

        Raises:
            TransportError: The request failed, timed out, or returned a
                non-2xx status.
        """
        merged: dict[str, str] = {
            **self.settings.DEFAULT_HEADERS,
            **(headers or {}),
        }
        try:
            resp = self.session.request(
                method,
                url,
                headers=merged,
                timeout=self._request_timeout,
                **kwargs,
            )
        except Exception as exc:
            self.logger.error(
                "[%s] %s %s failed: %s",
                self.component,
                method,
                url,
                exc,
            )
            raise TransportError(
                f"{method} {url} failed: {exc}"
            ) from exc

        if not 200 <= resp.status_code < 300:
            self.logger.error(
                "[%s] %s %s returned HTTP %d",
                self.component,
                method,
                url,
                resp.status_code,
            )
            raise TransportError(
                f"{method} {url} returned HTTP {resp.status_code}"
            )

        self.logger.debug(
            "[%s] %s %s -> HTTP %d",
            self.component,
            method,
            url,
            resp.status_code,
        )
        return resp
