# users/services/credentials.py

"""
CREDENTIAL POLICY

Purpose:
- Single narrow seam for how cashier passwords are stored and compared.
- AuthRegistry never touches password values directly.

KNOWN WEAKNESS:
- The default policy stores and compares plain text, matching the legacy data format.
  A hashing policy can replace it without changing any other component's contract.
"""

from __future__ import annotations

import hmac

from django.conf import settings


class CredentialPolicy:
    """Interface: how a password is stored and how a login attempt is checked."""

    def encode(self, password: str) -> str:
        raise NotImplementedError

    def verify(self, password: str, stored: str) -> bool:
        raise NotImplementedError


class PlainTextCredentialPolicy(CredentialPolicy):
    def encode(self, password: str) -> str:
        return password

    def verify(self, password: str, stored: str) -> bool:
        if password is None or stored is None:
            return False
        return hmac.compare_digest(str(password).encode(), str(stored).encode())


def admin_credentials_match(username: str, password: str) -> bool:
    """
    The administrator is a single built-in identity (settings), never stored with cashiers.
    """
    expected_user = settings.POS_ADMIN_USERNAME or ""
    expected_pass = settings.POS_ADMIN_PASSWORD or ""

    user_ok = hmac.compare_digest(str(username or "").encode(), expected_user.encode())
    pass_ok = hmac.compare_digest(str(password or "").encode(), expected_pass.encode())
    return user_ok and pass_ok


def default_credential_policy() -> CredentialPolicy:
    return PlainTextCredentialPolicy()
