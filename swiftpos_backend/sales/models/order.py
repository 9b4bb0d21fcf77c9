# sales/models/order.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from .order_item import OrderItem


@dataclass(frozen=True)
class Order:
    """
    A committed checkout (ledger entry).

    GUARANTEES:
    - Created exactly once, by CheckoutTransaction
    - Immutable: no update/delete operation exists
    - subtotal = sum(price * qty); tax = subtotal * tax rate; total = subtotal + tax (2dp)
    """

    id: str
    created_at: datetime
    items: tuple[OrderItem, ...]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    cashier_id: str | None = None
    cashier_name: str = ""

    @property
    def item_count(self) -> int:
        return sum(int(item.qty) for item in self.items)

    @property
    def summary(self) -> str:
        return ", ".join(str(item) for item in self.items)

    def __str__(self):
        return f"Order {self.id} | {self.cashier_name or self.cashier_id or '-'} | {self.total}"
