# src/scrapers/catalog_fetcher.py

"""Fetches the product listing and normalizes it into a snapshot."""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from src.config.settings import Settings
from src.models.product import ProductSnapshot, Snapshot
from src.models.session_context import SessionContext
from src.scrapers.errors import ResponseFormatError
from src.scrapers.storefront_client import StorefrontClient

logger = logging.getLogger("restock_tracker.catalog")

_REQUIRED_FIELDS = ("sku", "inventory_quantity", "inventory_low_stock_quantity")


def build_query_params(
    store_id: str, start: int = 0
) -> list[tuple[str, str]]:
    """Query string for one page of the category listing."""
    params: list[tuple[str, str]] = [
        (f"fields[{name}]", "1") for name in Settings.CATALOG_FIELDS
    ]
    params += [
        ("filters[0][field]", "categories"),
        ("filters[0][value][0]", Settings.CATEGORY_FILTER),
        ("filters[0][operator]", "in"),
        ("filters[0][original]", "1"),
        ("facets", "true"),
        ("facetgroup", "default_category_facet"),
        ("limit", str(Settings.PAGE_SIZE)),
        ("start", str(start)),
        ("substore", store_id),
    ]
    return params


def normalize_record(
    item: Any, checked_at: str
) -> ProductSnapshot | None:
    """Convert one raw API record, or return None if it is unusable."""
    if not isinstance(item, dict):
        return None
    if any(item.get(key) is None for key in _REQUIRED_FIELDS):
        return None
    try:
        quantity = int(item["inventory_quantity"])
        threshold = int(item["inventory_low_stock_quantity"])
    except (TypeError, ValueError):
        return None

    name = item.get("name")
    price = item.get("price")
    return ProductSnapshot(
        sku=str(item["sku"]),
        name=str(name) if name is not None else "Unknown Product",
        url=Settings.PRODUCT_PAGE_URL + str(item.get("alias") or ""),
        price=price if price is not None else "NA",
        inventory_quantity=quantity,
        low_stock_threshold=threshold,
        last_checked=checked_at,
    )


def normalize_records(
    records: Iterable[Any], checked_at: str
) -> Snapshot:
    """Build a snapshot from raw records; later duplicates overwrite."""
    snapshot: Snapshot = {}
    skipped = 0
    for item in records:
        entry = normalize_record(item, checked_at)
        if entry is None:
            skipped += 1
            logger.debug("Skipping incomplete record: %.200r", item)
            continue
        snapshot[entry.sku] = entry
    if skipped:
        logger.warning("Skipped %d incomplete product record(s)", skipped)
    return snapshot


class CatalogFetcher(StorefrontClient):
    """Issues the authenticated listing query for the tracked category."""

    MAX_PAGES = 5

    def __init__(self, context: SessionContext) -> None:
        super().__init__("catalog", context.session)
        self.context = context

    def _fetch_page(self, start: int) -> list[Any]:
        resp = self._request(
            "GET",
            self.settings.PRODUCTS_API_URL,
            headers=self.context.auth_headers,
            params=build_query_params(self.context.store_id, start),
        )
        try:
            payload = resp.json()
        except ValueError as exc:
            raise ResponseFormatError(
                f"Catalog response is not JSON: {exc}"
            ) from exc

        if not isinstance(payload, dict):
            raise ResponseFormatError(
                "Catalog response is not a JSON object"
            )
        records = payload.get("data")
        if not isinstance(records, list):
            raise ResponseFormatError(
                "Catalog response has no 'data' list"
            )
        return records

    def fetch(self) -> Snapshot:
        """Fetch every page of the listing as a snapshot keyed by SKU.

        Raises:
            TransportError: A page request failed.
            ResponseFormatError: A page lacked the ``data`` list.
        """
        self.logger.info(
            "Fetching products for store %s", self.context.store_id
        )
        checked_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        records: list[Any] = []
        for page in range(self.MAX_PAGES):
            batch = self._fetch_page(page * self.settings.PAGE_SIZE)
            records.extend(batch)
            if len(batch) < self.settings.PAGE_SIZE:
                break
        else:
            self.logger.warning(
                "Stopped after %d full pages; listing may be truncated",
                self.MAX_PAGES,
            )

        snapshot = normalize_records(records, checked_at)
        self.logger.info(
            "Fetched %d product(s) from %d record(s)",
            len(snapshot),
            len(records),
        )
        return snapshot
