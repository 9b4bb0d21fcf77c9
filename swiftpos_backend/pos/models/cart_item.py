# pos/models/cart_item.py

"""
CART ITEM (IN-MEMORY)

Purpose:
- One product line of an in-progress checkout.
- Price and stock cap are snapshots taken when the product was (re)added.

Rules:
- One line per product per cart (Cart keys lines by product id).
- 1 <= qty <= stock_cap at all times (Cart enforces via clamping).
- Never persisted; discarded on checkout or session end.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class CartItem:
    product_id: str
    name: str
    price: Decimal
    qty: int
    stock_cap: int

    @property
    def line_total(self) -> Decimal:
        return (self.price or Decimal("0.00")) * Decimal(int(self.qty or 0))

    def __str__(self):
        return f"{self.name} x {self.qty}"
