from .order import OrderSerializer
from .order_item import OrderItemSerializer

__all__ = [
    "OrderSerializer",
    "OrderItemSerializer",
]
