"""
PATH: storage/models/__init__.py

Storage models export surface.
"""

from .entry import StoreEntry, new_record_id

__all__ = [
    "StoreEntry",
    "new_record_id",
]
