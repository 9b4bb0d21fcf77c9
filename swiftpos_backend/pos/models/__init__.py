"""
PATH: pos/models/__init__.py

POS cart export surface (in-memory; nothing here is persisted).
"""

from .cart import Cart, CartError, CartTotals, ProductUnavailableError
from .cart_item import CartItem

__all__ = [
    "Cart",
    "CartItem",
    "CartTotals",
    "CartError",
    "ProductUnavailableError",
]
