# sales/services/checkout_orchestrator.py

"""
CHECKOUT ORCHESTRATOR (APPLICATION SERVICE)

Purpose:
- Turn a cart into an immutable Order while decrementing catalog stock.

Protocol:
1) Validate every line against LIVE stock (never the cart's stock_cap snapshot).
   Any shortage aborts the whole checkout and names every short product.
2) Commit: adjust_stock(-qty) per line, then append the Order (item snapshots + cart totals).
3) On success, the cart is cleared and the Order returned.

Concurrency:
- One committer at a time: a process-wide lock plus a DB transaction holding a row lock
  on the products collection. Validation runs inside that critical section, so a waiting
  checkout always re-validates against the stock left by the previous one.
- Any failure inside the transaction rolls back every stock change and the order append.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from django.db import transaction
from django.utils import timezone

from products.services.catalog import CatalogService
from sales.models import Order, OrderItem
from storage.models import new_record_id
from storage.repositories import OrderRepository

logger = logging.getLogger(__name__)

_COMMIT_LOCK = threading.RLock()


# ============================================================
# DOMAIN ERRORS
# ============================================================

class CheckoutError(Exception):
    """Base checkout exception"""

    code = "CHECKOUT_ERROR"


class EmptyCartError(CheckoutError):
    code = "EMPTY_CART"

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


@dataclass(frozen=True)
class StockShortage:
    product_id: str
    name: str
    requested: int
    available: int

    def __str__(self):
        return f"{self.name} (available: {self.available}, requested: {self.requested})"


class InsufficientStockError(CheckoutError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, shortages):
        self.shortages = list(shortages)
        super().__init__(
            "Insufficient stock for " + "; ".join(str(s) for s in self.shortages)
        )

    @property
    def product_ids(self) -> list[str]:
        return [s.product_id for s in self.shortages]


class CheckoutTransaction:
    def __init__(self, *, catalog: CatalogService | None = None, orders: OrderRepository | None = None):
        self.catalog = catalog or CatalogService()
        self.orders = orders or OrderRepository()

    def _shortages(self, cart) -> list[StockShortage]:
        live = {p.id: p for p in self.catalog.all()}

        out = []
        for line in cart.items:
            product = live.get(line.product_id)
            available = int(product.stock) if product is not None else 0
            if available < int(line.qty):
                out.append(
                    StockShortage(
                        product_id=line.product_id,
                        name=line.name,
                        requested=int(line.qty),
                        available=available,
                    )
                )
        return out

    def attempt(self, cart, session=None) -> Order:
        """
        Validate + commit `cart` for the signed-in cashier `session`.
        Raises EmptyCartError / InsufficientStockError without side effects.
        """
        if cart.is_empty:
            raise EmptyCartError()

        with _COMMIT_LOCK, transaction.atomic():
            self.catalog.products.lock()

            shortages = self._shortages(cart)
            if shortages:
                logger.warning(
                    "Checkout rejected: insufficient stock",
                    extra={"product_ids": [s.product_id for s in shortages]},
                )
                raise InsufficientStockError(shortages)

            totals = cart.totals()

            for line in cart.items:
                self.catalog.adjust_stock(line.product_id, -int(line.qty))

            order = Order(
                id=new_record_id(),
                created_at=timezone.now(),
                items=tuple(
                    OrderItem(
                        product_id=line.product_id,
                        name=line.name,
                        qty=int(line.qty),
                        price=line.price,
                    )
                    for line in cart.items
                ),
                subtotal=totals.subtotal,
                tax=totals.tax,
                total=totals.total,
                cashier_id=getattr(session, "cashier_id", None),
                cashier_name=session.display_name if session is not None else "",
            )
            self.orders.append(order)

        cart.clear()

        logger.info(
            "Checkout committed",
            extra={"order_id": order.id, "total": str(order.total), "items": order.item_count},
        )
        return order
