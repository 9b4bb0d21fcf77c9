# users/models/cashier.py

"""
CASHIER RECORD

Stored in the "cashiers" collection of the key-value store (not an ORM table).

Rules:
- username is unique (case-sensitive), enforced by AuthRegistry at creation time
- password is whatever the active CredentialPolicy stored (plain text by default)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Cashier:
    id: str
    username: str
    password: str
    name: str
    created_at: datetime

    def __str__(self):
        return f"{self.name} ({self.username})"
