from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from decimal import Decimal

from django.test import TestCase, override_settings

from products.models import Product
from sales.models import Order, OrderItem
from sales.services import LedgerAggregator, daily_stats, recent
from storage.repositories import OrderRepository, ProductRepository

NOW = datetime(2026, 5, 10, 15, 30, tzinfo=dt_timezone.utc)


def _order(order_id, created_at, qty=1, price="10.00"):
    price = Decimal(price)
    subtotal = price * qty
    tax = (subtotal * Decimal("0.10")).quantize(Decimal("0.01"))
    return Order(
        id=order_id,
        created_at=created_at,
        items=(OrderItem(product_id="p-1", name="Cable", qty=qty, price=price),),
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )


class DailyStatsTests(TestCase):
    """
    GUARANTEES:
    - Only orders in [local midnight, now) count towards today
    - Low stock is counted across the whole catalog
    """

    def test_today_window(self):
        orders = [
            _order("yesterday", NOW - timedelta(days=1)),
            _order("midnight", NOW.replace(hour=0, minute=0)),
            _order("morning", NOW.replace(hour=9), qty=2),
            _order("future", NOW + timedelta(minutes=5)),
        ]

        stats = daily_stats(orders, [], NOW, low_stock_threshold=5)

        self.assertEqual(stats.order_count, 2)
        self.assertEqual(stats.items_sold, 3)
        self.assertEqual(stats.revenue, Decimal("33.00"))

    def test_naive_now_is_local_time(self):
        orders = [_order("morning", NOW.replace(hour=9))]

        stats = daily_stats(orders, [], NOW.replace(tzinfo=None), low_stock_threshold=5)

        self.assertEqual(stats.order_count, 1)

    @override_settings(TIME_ZONE="America/New_York")
    def test_today_uses_local_day(self):
        # 03:00 UTC is still the previous day in New York
        orders = [_order("late", NOW.replace(hour=3))]

        stats = daily_stats(orders, [], NOW, low_stock_threshold=5)

        self.assertEqual(stats.order_count, 0)

    def test_low_stock_count(self):
        products = [
            Product(id="a", name="A", stock=0),
            Product(id="b", name="B", stock=5),
            Product(id="c", name="C", stock=6),
        ]

        stats = daily_stats([], products, NOW, low_stock_threshold=5)

        self.assertEqual(stats.low_stock_count, 2)
        self.assertEqual(stats.revenue, Decimal("0.00"))


class RecentOrdersTests(TestCase):
    """
    GUARANTEES:
    - Newest first
    - Bounded by the configured limit
    """

    def test_newest_first(self):
        orders = [
            _order("old", NOW - timedelta(hours=2)),
            _order("new", NOW - timedelta(minutes=1)),
            _order("mid", NOW - timedelta(hours=1)),
        ]

        self.assertEqual([o.id for o in recent(orders)], ["new", "mid", "old"])

    def test_equal_timestamps_keep_newest_appended_first(self):
        orders = [_order("first", NOW), _order("second", NOW)]

        self.assertEqual([o.id for o in recent(orders)], ["second", "first"])

    def test_limit(self):
        orders = [_order(f"o-{i}", NOW - timedelta(minutes=i)) for i in range(60)]

        self.assertEqual(len(recent(orders)), 50)
        self.assertEqual([o.id for o in recent(orders, 2)], ["o-0", "o-1"])


class LedgerAggregatorTests(TestCase):
    def test_reads_from_store(self):
        orders = OrderRepository()
        orders.append(_order("o-1", NOW - timedelta(hours=1), qty=2))
        ProductRepository().save_all([Product(id="p-1", name="Cable", stock=1)])

        ledger = LedgerAggregator()
        stats = ledger.daily_stats(NOW)

        self.assertEqual(stats.order_count, 1)
        self.assertEqual(stats.items_sold, 2)
        self.assertEqual(stats.revenue, Decimal("22.00"))
        self.assertEqual(stats.low_stock_count, 1)
        self.assertEqual(ledger.order_count(), 1)
        self.assertEqual([o.id for o in ledger.recent()], ["o-1"])
