# storage/repositories.py

"""
COLLECTION REPOSITORIES

Purpose:
- One repository per stored collection, injected into the service that owns it:
  - ProductRepository  -> CatalogService (sole owner of products)
  - CashierRepository  -> AuthRegistry (sole owner of cashiers)
  - OrderRepository    -> CheckoutTransaction (sole writer, append-only)
  - SessionRepository  -> surrounding application (opaque session record)
- Records are decoded/encoded with the owning app's DRF serializer.

Rules:
- A stored record that fails validation is skipped on read (logged), never raised.
- Mutations work on the raw stored list (insert / replace / remove by id):
  entries that fail validation are carried over untouched, never dropped.
"""

from __future__ import annotations

import logging

from django.db import transaction

from products.serializers import ProductSerializer
from sales.serializers import OrderSerializer
from storage.services import store
from users.serializers import CashierSerializer, SessionSerializer

logger = logging.getLogger(__name__)


def _raw_id(raw):
    if not isinstance(raw, dict) or raw.get("id") in (None, ""):
        return None
    return str(raw["id"])


class CollectionRepository:
    collection: str = ""
    serializer_class = None

    @property
    def key(self) -> str:
        return store.store_key(self.collection)

    def _decode(self, raw, *, index=None):
        serializer = self.serializer_class(data=raw)
        if not serializer.is_valid():
            logger.warning(
                "Skipping malformed stored record",
                extra={"key": self.key, "index": index, "errors": serializer.errors},
            )
            return None
        return serializer.save()

    def _encode(self, record) -> dict:
        return dict(self.serializer_class(record).data)

    def all(self) -> list:
        records = []
        for index, raw in enumerate(self.raw()):
            record = self._decode(raw, index=index)
            if record is not None:
                records.append(record)
        return records

    def lock(self):
        return store.lock(self.key)

    # -----------------------------
    # RAW MUTATION
    # -----------------------------
    def raw(self) -> list:
        return store.read(self.key)

    def find(self, record_id):
        """Decoded record with `record_id`, or None (absent or malformed)."""
        for index, raw in enumerate(self.raw()):
            if _raw_id(raw) == record_id:
                return self._decode(raw, index=index)
        return None

    @transaction.atomic
    def insert(self, record, *, first: bool = False) -> bool:
        existing = self.raw()
        encoded = self._encode(record)
        return store.write(self.key, [encoded, *existing] if first else [*existing, encoded])

    @transaction.atomic
    def replace(self, record) -> bool:
        """Swap the stored entry with the same id. False if there is none."""
        existing = self.raw()
        for index, raw in enumerate(existing):
            if _raw_id(raw) == record.id:
                existing[index] = self._encode(record)
                return store.write(self.key, existing)
        return False

    @transaction.atomic
    def remove(self, record_id) -> bool:
        existing = self.raw()
        remaining = [raw for raw in existing if _raw_id(raw) != record_id]
        if len(remaining) == len(existing):
            return False
        return store.write(self.key, remaining)


class ProductRepository(CollectionRepository):
    collection = "PRODUCTS"
    serializer_class = ProductSerializer

    def save_all(self, products) -> bool:
        return store.write(self.key, [self._encode(p) for p in products])


class CashierRepository(CollectionRepository):
    collection = "CASHIERS"
    serializer_class = CashierSerializer

    def save_all(self, cashiers) -> bool:
        return store.write(self.key, [self._encode(c) for c in cashiers])

    def usernames(self) -> set:
        """Every stored username, including records that fail validation."""
        return {raw.get("username") for raw in self.raw() if isinstance(raw, dict)}


class OrderRepository(CollectionRepository):
    collection = "ORDERS"
    serializer_class = OrderSerializer

    def append(self, order) -> bool:
        return self.insert(order)


class SessionRepository:
    """
    The active session record. Written after a successful login, cleared on logout.
    A malformed record reads as "signed out".
    """

    serializer_class = SessionSerializer

    @property
    def key(self) -> str:
        return store.store_key("SESSION")

    def get(self):
        raw = store.read_value(self.key)
        if raw is None:
            return None

        serializer = self.serializer_class(data=raw)
        if not serializer.is_valid():
            logger.warning("Stored session is malformed; treated as signed out", extra={"key": self.key})
            return None
        return serializer.save()

    def save(self, session) -> bool:
        return store.write_value(self.key, dict(self.serializer_class(session).data))

    def clear(self) -> bool:
        return store.delete_value(self.key)
