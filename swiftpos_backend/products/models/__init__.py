"""
PATH: products/models/__init__.py

Products records export surface.
"""

from .product import Product

__all__ = [
    "Product",
]
