# sales/models/__init__.py

"""
SALES RECORDS EXPORT SURFACE

Orders live in the append-only "orders" collection of the key-value store.
"""

from .order import Order
from .order_item import OrderItem

__all__ = [
    "Order",
    "OrderItem",
]
