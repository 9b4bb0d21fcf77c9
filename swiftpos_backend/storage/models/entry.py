# storage/models/entry.py

import uuid

from django.db import models


def new_record_id() -> str:
    """Opaque unique identifier for stored records (products, cashiers, orders)."""
    return str(uuid.uuid4())


class StoreEntry(models.Model):
    """
    One key of the local key-value store.

    GUARANTEES:
    - Keys are unique strings (e.g. "pos_products")
    - Value is JSON text; interpretation belongs to the reader
    - A write replaces the whole value (no partial updates)
    """

    key = models.CharField(max_length=128, unique=True)
    value = models.TextField(blank=True, default="")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "pos_store_entry"
        ordering = ["key"]

    def __str__(self):
        return f"{self.key} ({len(self.value or '')} chars)"
