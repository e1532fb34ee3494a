# src/storage/snapshot_store.py

"""Persisted SKU → product state mapping (the "previous" snapshot)."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from src.models.product import ProductSnapshot, Snapshot

logger = logging.getLogger("restock_tracker.storage")


class SnapshotStore:
    """JSON file holding the last fetched snapshot.

    ``load`` never fails a run: a missing or corrupt file reads as an
    empty snapshot.  ``save`` replaces the whole file through a temp
    file and ``os.replace`` so a crash mid-write leaves the old state
    intact.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Snapshot:
        """Read the persisted snapshot, or ``{}`` if unavailable."""
        if not self.path.exists():
            logger.info("No state file at %s; starting empty", self.path)
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                raw: Any = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning(
                "Unreadable state file %s (%s); starting empty",
                self.path,
                exc,
            )
            return {}

        if not isinstance(raw, dict):
            logger.warning(
                "State file %s holds a %s, not an object; starting empty",
                self.path,
                type(raw).__name__,
            )
            return {}

        snapshot: Snapshot = {}
        for sku, record in raw.items():
            if not isinstance(record, dict):
                logger.debug("Dropping malformed record for %s", sku)
                continue
            try:
                snapshot[sku] = ProductSnapshot.from_record(sku, record)
            except (KeyError, TypeError, ValueError) as exc:
                logger.debug(
                    "Dropping record for %s: %s", sku, exc
                )

        logger.debug(
            "Loaded %d product(s) from %s", len(snapshot), self.path
        )
        return snapshot

    def save(self, snapshot: Snapshot) -> Path:
        """Overwrite the state file with *snapshot*."""
        data = {sku: entry.to_record() for sku, entry in snapshot.items()}

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

        logger.info(
            "Saved %d product(s) to %s", len(snapshot), self.path
        )
        return self.path
