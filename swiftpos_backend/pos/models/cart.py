"""
PATH: pos/models/cart.py

CART ENGINE

Purpose:
- Mutable, per-checkout selection of products and quantities, built from catalog snapshots.
- Derive subtotal / tax / total from the current lines.

Rules:
- One line per product: re-adding increments qty instead of appending.
- qty is clamped to [1, stock_cap]; stock_cap is refreshed from live stock on every add.
- A product with no stock cannot enter the cart.
- totals() is a pure function of the lines (safe to call repeatedly).
- Money is Decimal, rounded half-up to cents.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings

from .cart_item import CartItem

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


class CartError(Exception):
    """Base cart exception"""

    code = "CART_ERROR"


class ProductUnavailableError(CartError):
    code = "OUT_OF_STOCK"

    def __init__(self, product):
        super().__init__(f"{product.name} is out of stock")
        self.product_id = product.id


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal


class Cart:
    def __init__(self, *, tax_rate=None):
        self._lines: dict[str, CartItem] = {}
        self.tax_rate = Decimal(str(settings.POS_TAX_RATE if tax_rate is None else tax_rate))

    # -----------------------------
    # READ
    # -----------------------------
    @property
    def items(self) -> list[CartItem]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        return sum(int(line.qty) for line in self._lines.values())

    def get(self, product_id: str) -> CartItem | None:
        return self._lines.get(product_id)

    def __len__(self):
        return len(self._lines)

    def __iter__(self):
        return iter(self.items)

    # -----------------------------
    # MUTATION
    # -----------------------------
    def add(self, product) -> "Cart":
        stock = int(product.stock or 0)
        if stock <= 0:
            raise ProductUnavailableError(product)

        line = self._lines.get(product.id)
        if line is None:
            self._lines[product.id] = CartItem(
                product_id=product.id,
                name=product.name,
                price=_money(product.price),
                qty=1,
                stock_cap=stock,
            )
        else:
            line.stock_cap = stock
            line.qty = min(line.qty + 1, stock)
        return self

    def set_qty(self, product_id: str, qty) -> "Cart":
        line = self._lines.get(product_id)
        if line is None:
            return self

        try:
            requested = int(qty)
        except (TypeError, ValueError):
            requested = 1

        line.qty = max(1, min(requested, line.stock_cap))
        return self

    def remove(self, product_id: str) -> "Cart":
        self._lines.pop(product_id, None)
        return self

    def clear(self) -> "Cart":
        self._lines.clear()
        return self

    # -----------------------------
    # TOTALS
    # -----------------------------
    def totals(self) -> CartTotals:
        subtotal = _money(sum((line.line_total for line in self._lines.values()), Decimal("0.00")))
        tax = _money(subtotal * self.tax_rate)
        return CartTotals(subtotal=subtotal, tax=tax, total=_money(subtotal + tax))

    def __str__(self):
        return f"Cart | {len(self)} lines | {self.item_count} items"
