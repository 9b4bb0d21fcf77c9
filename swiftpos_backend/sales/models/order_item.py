# sales/models/order_item.py

"""
ORDER ITEM (IMMUTABLE SNAPSHOT)

Name and price are copied from the cart at checkout time, not referenced.
The product may be edited or deleted later without changing this line.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class OrderItem:
    product_id: str
    name: str
    qty: int
    price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.price * Decimal(int(self.qty))

    def __str__(self):
        return f"{self.name} x{self.qty}"
