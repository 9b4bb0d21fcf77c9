from .checkout_orchestrator import (
    CheckoutError,
    CheckoutTransaction,
    EmptyCartError,
    InsufficientStockError,
    StockShortage,
)
from .ledger import DailyStats, LedgerAggregator, daily_stats, recent

__all__ = [
    "CheckoutTransaction",
    "CheckoutError",
    "EmptyCartError",
    "InsufficientStockError",
    "StockShortage",
    "LedgerAggregator",
    "DailyStats",
    "daily_stats",
    "recent",
]
