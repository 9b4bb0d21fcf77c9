# users/models/session.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from permissions.roles import ROLE_ADMIN, ROLE_CASHIER


@dataclass(frozen=True)
class Session:
    """
    Who is signed in, and in which role.

    Issued by AuthRegistry; persisting it (SessionRepository) is the caller's job.
    Carries no business invariants.
    """

    role: str
    username: str
    logged_at: datetime
    cashier_id: str | None = None
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_cashier(self) -> bool:
        return self.role == ROLE_CASHIER

    @property
    def display_name(self) -> str:
        return self.name or self.username
