# src/services/restock_detector.py

"""Diff two snapshots and report out-of-stock → in-stock transitions."""

import logging

from src.models.product import Snapshot, StockStatus
from src.models.restock_event import RestockEvent

logger = logging.getLogger("restock_tracker.detector")


def detect(current: Snapshot, previous: Snapshot) -> list[RestockEvent]:
    """Return restock events for SKUs that just came back in stock.

    Only the rising edge counts: the SKU must be OUT_OF_STOCK in
    *previous* and IN_STOCK in *current*.  SKUs missing from *previous*
    never fire, so the first run against an empty state file is silent.
    Events follow the iteration order of *current*.
    """
    events: list[RestockEvent] = []
    checked = 0
    skipped = 0

    for sku, entry in current.items():
        before = previous.get(sku)
        if before is None:
            skipped += 1
            logger.debug("SKIPPED (new product): %s (SKU: %s)", entry.name, sku)
            continue

        checked += 1
        if (
            before.availability_status is StockStatus.OUT_OF_STOCK
            and entry.availability_status is StockStatus.IN_STOCK
        ):
            events.append(RestockEvent.from_snapshot(entry))
            logger.info("RESTOCK DETECTED: %s (SKU: %s)", entry.name, sku)

    logger.info(
        "Restock check summary - checked: %d, skipped: %d, restocked: %d",
        checked,
        skipped,
        len(events),
    )
    return events
