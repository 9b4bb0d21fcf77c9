"""
PATH: users/models/__init__.py

Users records export surface.
"""

from .cashier import Cashier
from .session import Session

__all__ = [
    "Cashier",
    "Session",
]
