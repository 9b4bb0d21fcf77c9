from .auth_registry import (
    AuthError,
    AuthRegistry,
    CashierNotFoundError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    MissingFieldError,
)
from .credentials import CredentialPolicy, PlainTextCredentialPolicy

__all__ = [
    "AuthRegistry",
    "AuthError",
    "InvalidCredentialsError",
    "DuplicateUsernameError",
    "MissingFieldError",
    "CashierNotFoundError",
    "CredentialPolicy",
    "PlainTextCredentialPolicy",
]
