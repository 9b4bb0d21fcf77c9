# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS
- In-memory SQLite store
- Fixed tax rate / threshold / admin identity regardless of local .env
"""

from __future__ import annotations

from decimal import Decimal

from .base import *  # noqa: F403

DEBUG = False
TESTING = True

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

POS_TAX_RATE = Decimal("0.10")
POS_LOW_STOCK_THRESHOLD = 5
POS_RECENT_ORDERS_LIMIT = 50
POS_ADMIN_USERNAME = "admin"
POS_ADMIN_PASSWORD = "admin123"

TIME_ZONE = "UTC"

SENTRY_DSN = ""
