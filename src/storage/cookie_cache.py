# src/storage/cookie_cache.py

"""On-disk cookie jar cache so warm runs can skip the category-page fetch."""

import json
import logging
import os
import time
from pathlib import Path
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings

logger = logging.getLogger("restock_tracker.cookies")


class CookieCache:
    """Cookie jar persisted as JSON, trusted for ``max_age`` seconds.

    Age is taken from the file's modification time.  A stale or
    unreadable file is deleted so the next run negotiates from scratch.
    """

    def __init__(
        self,
        path: Path,
        max_age: float = Settings.COOKIE_MAX_AGE,
    ) -> None:
        self.path = Path(path)
        self._max_age = max_age

    def is_fresh(self, now: float | None = None) -> bool:
        """True if the cache file exists and is younger than max age."""
        if not self.path.exists():
            return False
        now = time.time() if now is None else now
        return now - self.path.stat().st_mtime < self._max_age

    def discard(self) -> None:
        """Remove the cache file if present."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        logger.info("Cookie jar removed: %s", self.path)

    def restore(self, session: curl_requests.Session) -> bool:
        """Load cached cookies into *session*.

        Returns True when a fresh jar was applied, False when the caller
        must warm the session up itself.
        """
        if not self.path.exists():
            return False
        if not self.is_fresh():
            logger.info("Cookie jar older than %.0fs", self._max_age)
            self.discard()
            return False

        try:
            with open(self.path, encoding="utf-8") as f:
                records: list[dict[str, Any]] = json.load(f)
            for rec in records:
                session.cookies.set(
                    rec["name"],
                    rec["value"],
                    domain=rec.get("domain", ""),
                    path=rec.get("path", "/"),
                    secure=bool(rec.get("secure", False)),
                )
        except (OSError, ValueError, TypeError, KeyError) as exc:
            logger.warning("Unreadable cookie jar %s: %s", self.path, exc)
            self.discard()
            return False

        logger.info(
            "Restored %d cookie(s) from %s", len(records), self.path
        )
        return True

    def persist(self, session: curl_requests.Session) -> int:
        """Write the session's cookies to disk; returns the count saved."""
        records = [
            {
                "name": c.name,
                "value": c.value or "",
                "domain": c.domain,
                "path": c.path,
                "secure": bool(c.secure),
            }
            for c in session.cookies.jar
        ]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
        os.replace(tmp, self.path)
        logger.debug("Saved %d cookie(s) to %s", len(records), self.path)
        return len(records)
