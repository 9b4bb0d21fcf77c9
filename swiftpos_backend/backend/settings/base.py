"""
PATH: backend/settings/base.py

BASE SETTINGS (shared by dev + prod + test)

Operational notes:
- The whole application state lives in one local key-value table (storage app).
- DATABASE_URL points at the durable medium for that table (SQLite file by default).
- POS business knobs (tax rate, low-stock threshold, admin identity) are env-driven.
- Sentry (optional): error visibility when SENTRY_DSN is set
"""

from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import environ

# -----------------------------------------
# BASE DIRECTORY
# -----------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# -----------------------------------------
# TEST MODE DETECTION
# -----------------------------------------
TESTING = "test" in sys.argv

# -----------------------------------------
# ENV (django-environ)
# -----------------------------------------
env = environ.Env(
    DEBUG=(bool, True),
    SECRET_KEY=(str, ""),
    TIME_ZONE=(str, "UTC"),
    DATABASE_URL=(str, f"sqlite:///{BASE_DIR / 'swiftpos.sqlite3'}"),
    LOG_LEVEL=(str, "INFO"),
    # POS business settings
    POS_TAX_RATE=(str, "0.10"),
    POS_LOW_STOCK_THRESHOLD=(int, 5),
    POS_RECENT_ORDERS_LIMIT=(int, 50),
    POS_ADMIN_USERNAME=(str, "admin"),
    POS_ADMIN_PASSWORD=(str, "admin123"),
    # Sentry (optional; enable by setting SENTRY_DSN)
    SENTRY_DSN=(str, ""),
    SENTRY_ENVIRONMENT=(str, "development"),
    SENTRY_TRACES_SAMPLE_RATE=(float, 0.0),
    SENTRY_SEND_PII=(bool, False),
)

# -----------------------------------------
# LOAD .env
# -----------------------------------------
env_file_1 = BASE_DIR / ".env"
env_file_2 = BASE_DIR.parent / ".env"

if env_file_1.exists():
    env.read_env(str(env_file_1))
elif env_file_2.exists():
    env.read_env(str(env_file_2))

# -----------------------------------------
# CORE SECURITY
# -----------------------------------------
SECRET_KEY = (env("SECRET_KEY") or "dev-insecure-change-me").strip()
DEBUG = env.bool("DEBUG")
ALLOWED_HOSTS: list[str] = []

# -----------------------------------------
# I18N / TZ
# -----------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = (env("TIME_ZONE") or "UTC").strip()
USE_I18N = True
USE_TZ = True

# -----------------------------------------
# INSTALLED APPS
# -----------------------------------------
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "storage.apps.StorageConfig",
    "users.apps.UsersConfig",
    "products.apps.ProductsConfig",
    "pos.apps.PosConfig",
    "sales.apps.SalesConfig",
]

# -----------------------------------------
# DATABASE (durable medium of the key-value store)
# -----------------------------------------
DATABASES = {
    "default": env.db("DATABASE_URL"),
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------------------
# POS STORE KEYS
# -----------------------------------------
POS_STORE_KEYS = {
    "PRODUCTS": "pos_products",
    "CASHIERS": "pos_cashiers",
    "ORDERS": "pos_orders",
    "SEEDED": "pos_seeded",
    "SESSION": "pos_session",
}

# -----------------------------------------
# POS BUSINESS SETTINGS
# -----------------------------------------
POS_TAX_RATE = Decimal((env("POS_TAX_RATE") or "0.10").strip())
POS_LOW_STOCK_THRESHOLD = env.int("POS_LOW_STOCK_THRESHOLD")
POS_RECENT_ORDERS_LIMIT = env.int("POS_RECENT_ORDERS_LIMIT")

# Single built-in administrator identity (not stored with cashiers).
POS_ADMIN_USERNAME = env("POS_ADMIN_USERNAME")
POS_ADMIN_PASSWORD = env("POS_ADMIN_PASSWORD")

# -----------------------------------------
# LOGGING
# -----------------------------------------
LOG_LEVEL = (env("LOG_LEVEL") or "INFO").strip().upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "storage": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "users": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "products": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "pos": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "sales": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

# -----------------------------------------
# SENTRY (optional)
# -----------------------------------------
SENTRY_DSN = (env("SENTRY_DSN") or "").strip()
SENTRY_ENVIRONMENT = (env("SENTRY_ENVIRONMENT") or "development").strip()
SENTRY_TRACES_SAMPLE_RATE = float(env("SENTRY_TRACES_SAMPLE_RATE"))
SENTRY_SEND_PII = env.bool("SENTRY_SEND_PII")

if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=SENTRY_ENVIRONMENT,
        integrations=[DjangoIntegration()],
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=SENTRY_SEND_PII,
    )
