# storage/services/store.py

"""
KEY-VALUE STORE SERVICE

Purpose:
- Synchronous get/set access to named values of the local store.
- Collections are JSON arrays of records; other keys hold arbitrary JSON.

Rules:
- A write replaces the whole value inside one DB transaction (no partial writes visible).
- Malformed stored data is treated as "absent": readers get the default, never an error.
  Availability wins over strict durability here.
- Row locks (select_for_update) are only meaningful inside transaction.atomic().
"""

from __future__ import annotations

import json
import logging

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction

from storage.models import StoreEntry

logger = logging.getLogger(__name__)

_MISSING = object()


def store_key(name: str) -> str:
    """Resolve a logical collection name ("PRODUCTS") to its store key ("pos_products")."""
    return settings.POS_STORE_KEYS[name]


def _encode(value) -> str:
    return json.dumps(value, cls=DjangoJSONEncoder)


def _load(key: str):
    raw = StoreEntry.objects.filter(key=key).values_list("value", flat=True).first()
    if raw is None:
        return _MISSING

    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Malformed stored value treated as absent", extra={"key": key})
        return _MISSING


# ============================================================
# COLLECTIONS
# ============================================================

def read(key: str, default=None) -> list:
    """
    Read a collection. Missing, undecodable or non-list values yield `default` (empty list).
    """
    fallback = [] if default is None else default

    data = _load(key)
    if data is _MISSING:
        return list(fallback)

    if not isinstance(data, list):
        logger.warning(
            "Stored collection is not a list; treated as absent",
            extra={"key": key, "type": type(data).__name__},
        )
        return list(fallback)

    return data


@transaction.atomic
def write(key: str, records) -> bool:
    StoreEntry.objects.update_or_create(
        key=key,
        defaults={"value": _encode(list(records))},
    )
    return True


# ============================================================
# PLAIN VALUES (markers, session record)
# ============================================================

def exists(key: str) -> bool:
    return StoreEntry.objects.filter(key=key).exists()


def read_value(key: str, default=None):
    data = _load(key)
    return default if data is _MISSING else data


@transaction.atomic
def write_value(key: str, value) -> bool:
    StoreEntry.objects.update_or_create(key=key, defaults={"value": _encode(value)})
    return True


def delete_value(key: str) -> bool:
    deleted, _ = StoreEntry.objects.filter(key=key).delete()
    return bool(deleted)


# ============================================================
# LOCKING
# ============================================================

def lock(key: str, *, initial=None) -> StoreEntry:
    """
    Lock the row behind `key` until the surrounding transaction ends.
    An absent key is created holding `initial` (default: empty collection) so there is
    always something to lock.
    """
    if not transaction.get_connection().in_atomic_block:
        raise RuntimeError("store.lock() must be called inside transaction.atomic()")

    entry, _ = StoreEntry.objects.select_for_update().get_or_create(
        key=key,
        defaults={"value": _encode([] if initial is None else initial)},
    )
    return entry


def holds(entry: StoreEntry, value) -> bool:
    """True while `entry` still carries exactly `value` (e.g. the placeholder written by lock())."""
    return entry.value == _encode(value)
