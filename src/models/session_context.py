# src/models/session_context.py

"""Authenticated storefront session produced by negotiation."""

from dataclasses import dataclass

from curl_cffi import requests as curl_requests


@dataclass
class SessionContext:
    """Cookie-bearing session pinned to one store, plus its ``tid`` token."""

    session: curl_requests.Session
    tid: str
    store_id: str

    @property
    def auth_headers(self) -> dict[str, str]:
        """Headers every authenticated storefront call must carry."""
        return {"tid": self.tid}
