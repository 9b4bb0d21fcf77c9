# users/services/auth_registry.py

"""
AUTH REGISTRY (APPLICATION SERVICE)

Purpose:
- Validate admin / cashier credentials and issue Session descriptors.
- Own the cashier collection: self sign-up, admin add, password reset, removal.

Hard rules:
- Cashier usernames are unique (case-sensitive) across every creation path.
- Login failures never reveal which part (username or password) was wrong.
- The registry never stores the session itself; callers persist the returned descriptor.
- Password storage/comparison goes through the CredentialPolicy seam only.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from django.db import transaction
from django.utils import timezone

from permissions.roles import ROLE_ADMIN, ROLE_CASHIER
from storage.models import new_record_id
from storage.repositories import CashierRepository
from users.models import Cashier, Session
from users.services.credentials import admin_credentials_match, default_credential_policy

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class AuthError(Exception):
    """Base exception for authentication / staff registry failures."""

    code = "AUTH_ERROR"


class InvalidCredentialsError(AuthError):
    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class DuplicateUsernameError(AuthError):
    code = "DUPLICATE_USERNAME"

    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.username = username


class MissingFieldError(AuthError):
    code = "MISSING_FIELD"

    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(f"Please fill all fields: {', '.join(self.fields)}")


class CashierNotFoundError(AuthError):
    code = "NOT_FOUND"

    def __init__(self, cashier_id):
        super().__init__(f"Cashier {cashier_id} not found")
        self.cashier_id = cashier_id


def _require(**values) -> None:
    missing = [field for field, value in values.items() if not value]
    if missing:
        raise MissingFieldError(missing)


class AuthRegistry:
    def __init__(self, *, cashiers: CashierRepository | None = None, credentials=None):
        self.cashiers = cashiers or CashierRepository()
        self.credentials = credentials or default_credential_policy()

    # =====================================================
    # AUTHENTICATION
    # =====================================================

    def authenticate_admin(self, username: str, password: str) -> Session:
        if not admin_credentials_match(username, password):
            logger.warning("Admin login failed")
            raise InvalidCredentialsError()

        logger.info("Admin signed in")
        return Session(role=ROLE_ADMIN, username=username, logged_at=timezone.now())

    def authenticate_cashier(self, username: str, password: str) -> Session:
        match = next(
            (
                c
                for c in self.cashiers.all()
                if c.username == username and self.credentials.verify(password, c.password)
            ),
            None,
        )
        if match is None:
            logger.warning("Cashier login failed")
            raise InvalidCredentialsError()

        logger.info("Cashier signed in", extra={"cashier_id": match.id})
        return Session(
            role=ROLE_CASHIER,
            username=match.username,
            logged_at=timezone.now(),
            cashier_id=match.id,
            name=match.name,
        )

    # =====================================================
    # STAFF REGISTRY
    # =====================================================

    def list_cashiers(self) -> list[Cashier]:
        return self.cashiers.all()

    def get_cashier(self, cashier_id: str) -> Cashier:
        cashier = self.cashiers.find(cashier_id)
        if cashier is None:
            raise CashierNotFoundError(cashier_id)
        return cashier

    @transaction.atomic
    def _create(self, *, username: str, password: str, name: str, prepend: bool) -> Cashier:
        _require(username=username, password=password, name=name)

        self.cashiers.lock()

        # usernames of records that fail validation still count as taken
        if username in self.cashiers.usernames():
            raise DuplicateUsernameError(username)

        cashier = Cashier(
            id=new_record_id(),
            username=username,
            password=self.credentials.encode(password),
            name=name,
            created_at=timezone.now(),
        )

        self.cashiers.insert(cashier, first=prepend)

        logger.info("Cashier created", extra={"cashier_id": cashier.id, "self_registered": not prepend})
        return cashier

    def register_cashier(self, username: str, password: str, name: str) -> Cashier:
        """Cashier self sign-up (appended to the staff list)."""
        return self._create(username=username, password=password, name=name, prepend=False)

    def add_cashier(self, username: str, password: str, name: str) -> Cashier:
        """Administrator-created account (listed first)."""
        return self._create(username=username, password=password, name=name, prepend=True)

    @transaction.atomic
    def reset_password(self, cashier_id: str, new_password: str) -> Cashier:
        _require(password=new_password)

        self.cashiers.lock()

        current = self.cashiers.find(cashier_id)
        if current is None:
            raise CashierNotFoundError(cashier_id)

        updated = replace(current, password=self.credentials.encode(new_password))
        self.cashiers.replace(updated)
        logger.info("Cashier password reset", extra={"cashier_id": cashier_id})
        return updated

    @transaction.atomic
    def remove_cashier(self, cashier_id: str) -> bool:
        self.cashiers.lock()

        if not self.cashiers.remove(cashier_id):
            raise CashierNotFoundError(cashier_id)

        logger.info("Cashier removed", extra={"cashier_id": cashier_id})
        return True
