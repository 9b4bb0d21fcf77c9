# products/services/catalog.py

"""
CATALOG SERVICE

Purpose:
- Own the product collection: lookup (text search, exact barcode) and mutation.
- Provide the stock adjustment primitive checkout depends on.

Rules:
- upsert is a full replacement (no merge); new products get a fresh id and are listed first.
- adjust_stock never lets stock go below zero; a rejected adjustment changes nothing.
- Deleting a product never touches the order ledger (orders hold snapshots).
"""

from __future__ import annotations

import logging
from dataclasses import replace

from django.conf import settings
from django.db import transaction

from products.models import Product
from products.serializers import ProductSerializer
from storage.repositories import ProductRepository

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class CatalogError(Exception):
    """Base catalog exception"""

    code = "CATALOG_ERROR"


class ProductNotFoundError(CatalogError):
    code = "NOT_FOUND"

    def __init__(self, product_id):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class NegativeStockError(CatalogError):
    code = "WOULD_GO_NEGATIVE"

    def __init__(self, product: Product, delta: int):
        super().__init__(
            f"Cannot reduce stock below zero for {product.name}. "
            f"Stock: {product.stock}, Change: {delta}"
        )
        self.product = product
        self.delta = delta


class InvalidProductError(CatalogError):
    code = "INVALID_PRODUCT"

    def __init__(self, errors):
        super().__init__(f"Invalid product data: {dict(errors)}")
        self.errors = errors


def _to_int_delta(value) -> int:
    if isinstance(value, bool):
        # guardrail: bool is an int subclass in Python
        raise ValueError("stock delta must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError("stock delta must be an integer")


class CatalogService:
    def __init__(self, *, products: ProductRepository | None = None):
        self.products = products or ProductRepository()

    # =====================================================
    # LOOKUP
    # =====================================================

    def all(self) -> list[Product]:
        return self.products.all()

    def search(self, query: str = "", *, limit: int | None = None) -> list[Product]:
        """
        Case-insensitive substring search on name, SKU, barcode or category.
        Empty query returns the collection in stored order.
        """
        needle = (query or "").strip().lower()
        found = [p for p in self.products.all() if p.matches(needle)]
        if limit is not None:
            found = found[: max(0, int(limit))]
        return found

    def find_by_exact_code(self, code: str) -> Product | None:
        """Scan-to-add: exact barcode match."""
        code = (code or "").strip()
        if not code:
            return None
        return next((p for p in self.products.all() if p.barcode == code), None)

    def get(self, product_id: str) -> Product:
        product = self.products.find(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def low_stock(self, threshold: int | None = None) -> list[Product]:
        if threshold is None:
            threshold = settings.POS_LOW_STOCK_THRESHOLD
        return [p for p in self.products.all() if p.is_low_stock(threshold)]

    # =====================================================
    # MUTATION
    # =====================================================

    @transaction.atomic
    def upsert(self, data) -> Product:
        """
        Create (no id) or fully replace (id present) a product from admin input.
        """
        serializer = ProductSerializer(data=data)
        if not serializer.is_valid():
            raise InvalidProductError(serializer.errors)

        product_id = serializer.validated_data.get("id") or None
        product = serializer.save()

        self.products.lock()

        if product_id is None:
            self.products.insert(product, first=True)
            logger.info("Product created", extra={"product_id": product.id})
            return product

        if not self.products.replace(product):
            raise ProductNotFoundError(product_id)

        logger.info("Product updated", extra={"product_id": product.id})
        return product

    @transaction.atomic
    def delete(self, product_id: str) -> bool:
        self.products.lock()

        if not self.products.remove(product_id):
            raise ProductNotFoundError(product_id)

        logger.info("Product deleted", extra={"product_id": product_id})
        return True

    @transaction.atomic
    def adjust_stock(self, product_id: str, delta) -> Product:
        """
        Apply a signed stock change.

        delta:
          +N -> stock increases
          -N -> stock decreases (rejected if the result would be negative)
        """
        delta = _to_int_delta(delta)

        self.products.lock()

        current = self.products.find(product_id)
        if current is None:
            raise ProductNotFoundError(product_id)

        new_stock = int(current.stock) + delta
        if new_stock < 0:
            raise NegativeStockError(current, delta)

        updated = replace(current, stock=new_stock)
        self.products.replace(updated)

        logger.info(
            "Stock adjusted",
            extra={"product_id": product_id, "delta": delta, "stock": new_stock},
        )
        return updated
