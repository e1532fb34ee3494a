# src/models/restock_event.py

"""Restock event emitted when a SKU goes from out of stock to in stock."""

from dataclasses import dataclass
from typing import Any

from src.models.product import ProductSnapshot


@dataclass(frozen=True)
class RestockEvent:
    """Projection of the current snapshot entry for a restocked SKU."""

    sku: str
    name: str
    price: Any
    url: str
    inventory_quantity: int
    low_stock_threshold: int

    @property
    def units_available(self) -> int:
        """Sellable units above the low-stock cutoff."""
        return self.inventory_quantity - self.low_stock_threshold

    @classmethod
    def from_snapshot(cls, entry: ProductSnapshot) -> "RestockEvent":
        return cls(
            sku=entry.sku,
            name=entry.name,
            price=entry.price,
            url=entry.url,
            inventory_quantity=entry.inventory_quantity,
            low_stock_threshold=entry.low_stock_threshold,
        )
