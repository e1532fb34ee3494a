# src/models/product.py

"""Product snapshot model: one tracked SKU as seen by a single fetch."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class StockStatus(str, Enum):
    """Availability of a SKU for new orders."""

    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"


@dataclass
class ProductSnapshot:
    """State of a single SKU at the time of one catalog fetch.

    ``availability_status`` is derived from the quantities on every
    access.  The storefront holds back ``low_stock_threshold`` units, so
    an item with stock at or below that buffer is not orderable.
    """

    sku: str
    name: str
    url: str
    price: Any
    inventory_quantity: int
    low_stock_threshold: int
    last_checked: str = ""

    @property
    def availability_status(self) -> StockStatus:
        """IN_STOCK iff quantity is strictly above the low-stock buffer."""
        if self.inventory_quantity > self.low_stock_threshold:
            return StockStatus.IN_STOCK
        return StockStatus.OUT_OF_STOCK

    @property
    def in_stock(self) -> bool:
        return self.availability_status is StockStatus.IN_STOCK

    def to_record(self) -> dict[str, Any]:
        """Serialise to the persisted state-file record (SKU is the key)."""
        return {
            "name": self.name,
            "url": self.url,
            "price": self.price,
            "inventory_quantity": self.inventory_quantity,
            "inventory_low_stock_quantity": self.low_stock_threshold,
            "status": self.availability_status.value,
            "last_checked": self.last_checked,
        }

    @classmethod
    def from_record(
        cls, sku: str, record: dict[str, Any]
    ) -> "ProductSnapshot":
        """Rebuild an entry from a state-file record.

        The stored ``status`` is ignored; availability is recomputed.

        Raises:
            KeyError: A quantity field is missing.
            TypeError, ValueError: A quantity is not an integer.
        """
        return cls(
            sku=sku,
            name=str(record.get("name", "Unknown Product")),
            url=str(record.get("url", "")),
            price=record.get("price", "NA"),
            inventory_quantity=int(record["inventory_quantity"]),
            low_stock_threshold=int(
                record["inventory_low_stock_quantity"]
            ),
            last_checked=str(record.get("last_checked", "")),
        )


Snapshot = dict[str, ProductSnapshot]
