# sales/services/ledger.py

"""
LEDGER AGGREGATOR (ADMIN REPORTS)

Purpose:
- Derive today's sales statistics and the recent-orders list from the order ledger.

Contract:
- Pure + read-only: recomputed from the full collections on every call (no cached state).
- "Today" = orders with created_at in [start of local day(now), now), local = settings.TIME_ZONE.
- A naive `now` is taken as local time.
- Low stock counts products with stock <= POS_LOW_STOCK_THRESHOLD, independent of the window.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings
from django.utils import timezone

from storage.repositories import OrderRepository, ProductRepository


@dataclass(frozen=True)
class DailyStats:
    revenue: Decimal
    order_count: int
    items_sold: int
    low_stock_count: int


def _day_start(now):
    local_now = timezone.localtime(now)
    return local_now.replace(hour=0, minute=0, second=0, microsecond=0)


def daily_stats(orders, products, now=None, *, low_stock_threshold: int | None = None) -> DailyStats:
    now = now or timezone.now()
    if timezone.is_naive(now):
        now = timezone.make_aware(now)
    if low_stock_threshold is None:
        low_stock_threshold = settings.POS_LOW_STOCK_THRESHOLD

    start = _day_start(now)
    todays = [o for o in orders if start <= o.created_at < now]

    return DailyStats(
        revenue=sum((o.total for o in todays), Decimal("0.00")),
        order_count=len(todays),
        items_sold=sum(o.item_count for o in todays),
        low_stock_count=sum(1 for p in products if p.is_low_stock(low_stock_threshold)),
    )


def recent(orders, limit: int | None = None) -> list:
    """
    Most recent first. Orders with equal timestamps keep newest-appended first.
    """
    if limit is None:
        limit = settings.POS_RECENT_ORDERS_LIMIT

    newest_first = sorted(reversed(list(orders)), key=lambda o: o.created_at, reverse=True)
    return newest_first[: max(0, int(limit))]


class LedgerAggregator:
    def __init__(self, *, orders: OrderRepository | None = None, products: ProductRepository | None = None):
        self.orders = orders or OrderRepository()
        self.products = products or ProductRepository()

    def daily_stats(self, now=None) -> DailyStats:
        return daily_stats(self.orders.all(), self.products.all(), now)

    def recent(self, limit: int | None = None) -> list:
        return recent(self.orders.all(), limit)

    def order_count(self) -> int:
        return len(self.orders.all())
