# products/models/product.py

"""
PRODUCT RECORD

Stored in the "products" collection of the key-value store (not an ORM table).

Rules:
- price is a non-negative Decimal with 2 places
- stock is a non-negative integer; checkout is the only non-admin writer of it
- deleting a product never alters past orders (orders hold snapshots)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    sku: str = ""
    barcode: str = ""
    price: Decimal = Decimal("0.00")
    stock: int = 0
    category: str = ""

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match on name, SKU, barcode or category."""
        needle = (needle or "").strip().lower()
        if not needle:
            return True
        return any(
            needle in (field or "").lower()
            for field in (self.name, self.sku, self.barcode, self.category)
        )

    def is_low_stock(self, threshold: int) -> bool:
        return int(self.stock) <= int(threshold)

    def __str__(self):
        return f"{self.name} [{self.sku or '-'}]"
