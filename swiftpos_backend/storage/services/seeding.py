# storage/services/seeding.py

"""
ONE-TIME SEEDING

Purpose:
- Populate a fresh installation with a starter catalog, one cashier and an empty ledger.

Rules:
- Guarded by a separate marker key: once it exists, seeding is a no-op.
- Marker + collections are written in one transaction (all or nothing).
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from products.models import Product
from storage.models import new_record_id
from storage.repositories import CashierRepository, ProductRepository
from storage.services import store
from users.models import Cashier
from users.services.credentials import default_credential_policy

logger = logging.getLogger(__name__)


DEFAULT_PRODUCTS = [
    # (name, sku, barcode, price, stock, category)
    ("Visa Gift Card $25", "VISA25", "10001", "25.00", 100, "Gift Cards"),
    ("Visa Gift Card $50", "VISA50", "10002", "50.00", 80, "Gift Cards"),
    ("USB-C Cable 1m", "CAB-USB-C-1M", "20001", "9.99", 50, "Accessories"),
    ("Wireless Mouse", "MOU-WLS", "30001", "19.99", 30, "Peripherals"),
]

DEFAULT_CASHIERS = [
    # (username, password, name)
    ("cashier1", "pass123", "Cashier One"),
]


def default_products() -> list[Product]:
    return [
        Product(
            id=new_record_id(),
            name=name,
            sku=sku,
            barcode=barcode,
            price=Decimal(price),
            stock=stock,
            category=category,
        )
        for name, sku, barcode, price, stock, category in DEFAULT_PRODUCTS
    ]


def default_cashiers(*, credentials=None) -> list[Cashier]:
    credentials = credentials or default_credential_policy()
    now = timezone.now()
    return [
        Cashier(
            id=new_record_id(),
            username=username,
            password=credentials.encode(password),
            name=name,
            created_at=now,
        )
        for username, password, name in DEFAULT_CASHIERS
    ]


@transaction.atomic
def seed_once(*, products=None, cashiers=None) -> bool:
    """
    Returns True if this call seeded the store, False if it was already seeded.
    """
    marker = store.store_key("SEEDED")
    entry = store.lock(marker, initial=False)

    # any stored marker, even an unreadable one, means seeded
    if not store.holds(entry, False):
        logger.debug("Store already seeded; skipping", extra={"key": marker})
        return False

    products = default_products() if products is None else list(products)
    cashiers = default_cashiers() if cashiers is None else list(cashiers)

    ProductRepository().save_all(products)
    CashierRepository().save_all(cashiers)
    store.write(store.store_key("ORDERS"), [])
    store.write_value(marker, "1")

    logger.info(
        "Seeded POS store",
        extra={"products": len(products), "cashiers": len(cashiers)},
    )
    return True
