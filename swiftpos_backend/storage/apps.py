# storage/apps.py

"""
STORAGE APP CONFIG

Local key-value store module:
- One durable table of string-keyed JSON values
- Named collections (products, cashiers, orders) + seeding marker + session record
- Repository per collection (one writer per collection)
"""

from django.apps import AppConfig


class StorageConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "storage"
    verbose_name = "POS Key-Value Store"
