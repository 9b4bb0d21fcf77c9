import threading
from decimal import Decimal

from django.db import DEFAULT_DB_ALIAS, connections
from django.test import TestCase

from pos.models import Cart
from products.models import Product
from products.services import CatalogService
from sales.services import (
    CheckoutTransaction,
    EmptyCartError,
    InsufficientStockError,
)
from storage.repositories import OrderRepository, ProductRepository
from users.services import AuthRegistry


class CheckoutTransactionTests(TestCase):
    """
    Tests for cart -> order checkout.

    GUARANTEES:
    - Stock decremented by exactly the sold quantities
    - Order totals equal the cart totals at commit time
    - Validation against LIVE stock, never the cart snapshot
    - All-or-nothing: a rejected checkout changes nothing
    """

    def setUp(self):
        self.products = ProductRepository()
        self.orders = OrderRepository()
        self.products.save_all(
            [
                Product(id="p-1", name="Cable", sku="CAB", barcode="111", price=Decimal("10.00"), stock=3),
                Product(id="p-2", name="Mouse", sku="MOU", barcode="222", price=Decimal("19.99"), stock=10),
            ]
        )
        self.catalog = CatalogService(products=self.products)
        self.checkout = CheckoutTransaction(catalog=self.catalog, orders=self.orders)

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------

    def _cart_with(self, product_id, qty):
        cart = Cart(tax_rate=Decimal("0.10"))
        cart.add(self.catalog.get(product_id))
        cart.set_qty(product_id, qty)
        return cart

    # --------------------------------------------------
    # Happy path
    # --------------------------------------------------

    def test_checkout_decrements_stock_and_records_order(self):
        cart = self._cart_with("p-1", 3)

        order = self.checkout.attempt(cart)

        self.assertEqual(order.subtotal, Decimal("30.00"))
        self.assertEqual(order.tax, Decimal("3.00"))
        self.assertEqual(order.total, Decimal("33.00"))
        self.assertEqual(self.catalog.get("p-1").stock, 0)
        self.assertTrue(cart.is_empty)

        stored = self.orders.all()
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0].id, order.id)
        self.assertEqual(stored[0].total, Decimal("33.00"))
        self.assertEqual(stored[0].items[0].qty, 3)

    def test_order_totals_match_cart_totals(self):
        cart = self._cart_with("p-1", 2)
        cart.add(self.catalog.get("p-2"))
        cart.set_qty("p-2", 3)
        expected = cart.totals()

        order = self.checkout.attempt(cart)

        self.assertEqual(order.subtotal, expected.subtotal)
        self.assertEqual(order.tax, expected.tax)
        self.assertEqual(order.total, expected.total)
        self.assertEqual(order.total, order.subtotal + order.tax)
        self.assertEqual(order.item_count, 5)

    def test_order_records_signed_in_cashier(self):
        registry = AuthRegistry()
        cashier = registry.register_cashier("jdoe", "pw", "Jane Doe")
        session = registry.authenticate_cashier("jdoe", "pw")

        order = self.checkout.attempt(self._cart_with("p-2", 1), session)

        self.assertEqual(order.cashier_id, cashier.id)
        self.assertEqual(order.cashier_name, "Jane Doe")

    # --------------------------------------------------
    # Rejections
    # --------------------------------------------------

    def test_empty_cart_rejected(self):
        with self.assertRaises(EmptyCartError):
            self.checkout.attempt(Cart())

        self.assertEqual(self.orders.all(), [])

    def test_stock_sold_elsewhere_rejects_checkout(self):
        cart = self._cart_with("p-1", 3)

        # another terminal sells the remaining units
        self.catalog.adjust_stock("p-1", -3)

        with self.assertRaises(InsufficientStockError) as ctx:
            self.checkout.attempt(cart)

        self.assertEqual(ctx.exception.code, "INSUFFICIENT_STOCK")
        self.assertEqual(ctx.exception.product_ids, ["p-1"])
        self.assertEqual(ctx.exception.shortages[0].available, 0)
        self.assertEqual(ctx.exception.shortages[0].requested, 3)
        self.assertEqual(self.orders.all(), [])
        self.assertEqual(self.catalog.get("p-1").stock, 0)
        self.assertFalse(cart.is_empty)

    def test_partial_shortage_changes_nothing(self):
        cart = self._cart_with("p-1", 3)
        cart.add(self.catalog.get("p-2"))
        cart.set_qty("p-2", 4)

        self.catalog.adjust_stock("p-2", -8)

        with self.assertRaises(InsufficientStockError) as ctx:
            self.checkout.attempt(cart)

        self.assertEqual(ctx.exception.product_ids, ["p-2"])
        self.assertEqual(self.catalog.get("p-1").stock, 3)
        self.assertEqual(self.catalog.get("p-2").stock, 2)
        self.assertEqual(self.orders.all(), [])

    def test_deleted_product_counts_as_unavailable(self):
        cart = self._cart_with("p-2", 1)
        self.catalog.delete("p-2")

        with self.assertRaises(InsufficientStockError) as ctx:
            self.checkout.attempt(cart)

        self.assertEqual(ctx.exception.shortages[0].available, 0)

    def test_second_checkout_sees_first_checkout_stock(self):
        first = self._cart_with("p-1", 2)
        second = self._cart_with("p-1", 2)

        self.checkout.attempt(first)

        with self.assertRaises(InsufficientStockError):
            self.checkout.attempt(second)

        self.assertEqual(self.catalog.get("p-1").stock, 1)
        self.assertEqual(len(self.orders.all()), 1)

    # --------------------------------------------------
    # Ledger integrity
    # --------------------------------------------------

    def test_orders_survive_product_deletion(self):
        order = self.checkout.attempt(self._cart_with("p-1", 1))

        self.catalog.delete("p-1")

        stored = self.orders.all()
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0].items[0].name, "Cable")
        self.assertEqual(stored[0].items[0].price, Decimal("10.00"))
        self.assertEqual(stored[0].id, order.id)


class _InterleavingCatalog(CatalogService):
    """
    Starts `rival` the first time live stock is read, i.e. while this checkout
    holds the commit lock, and records whether the rival was left waiting.
    """

    def __init__(self, rival, **kwargs):
        super().__init__(**kwargs)
        self.rival = rival
        self.rival_waited = None

    def all(self):
        if self.rival is not None:
            rival, self.rival = self.rival, None
            rival.start()
            rival.join(timeout=0.3)
            self.rival_waited = rival.is_alive()
        return super().all()


class OverlappingCheckoutTests(TestCase):
    """
    Two checkouts competing for the last units.

    GUARANTEES:
    - The second committer waits for the first
    - It re-validates against the stock the first one left, then is rejected
    - Stock is never decremented from a stale read
    """

    def setUp(self):
        self.products = ProductRepository()
        self.orders = OrderRepository()
        self.products.save_all(
            [Product(id="p-1", name="Cable", sku="CAB", barcode="111", price=Decimal("10.00"), stock=3)]
        )
        self.catalog = CatalogService(products=self.products)

    def _cart_with(self, qty):
        cart = Cart(tax_rate=Decimal("0.10"))
        cart.add(self.catalog.get("p-1"))
        cart.set_qty("p-1", qty)
        return cart

    def test_rival_waits_then_sees_committed_stock(self):
        connection = connections[DEFAULT_DB_ALIAS]
        first_cart = self._cart_with(3)
        rival_cart = self._cart_with(2)
        outcome = {}

        def run_rival():
            # share the test transaction's connection with the rival thread
            connections[DEFAULT_DB_ALIAS] = connection
            rival_checkout = CheckoutTransaction(
                catalog=CatalogService(products=self.products), orders=self.orders
            )
            try:
                outcome["order"] = rival_checkout.attempt(rival_cart)
            except Exception as exc:
                outcome["error"] = exc

        rival = threading.Thread(target=run_rival)
        catalog = _InterleavingCatalog(rival, products=self.products)
        checkout = CheckoutTransaction(catalog=catalog, orders=self.orders)

        connection.inc_thread_sharing()
        try:
            order = checkout.attempt(first_cart)
            rival.join(timeout=10)
        finally:
            connection.dec_thread_sharing()

        self.assertTrue(catalog.rival_waited)
        self.assertFalse(rival.is_alive())
        self.assertNotIn("order", outcome)
        self.assertIsInstance(outcome.get("error"), InsufficientStockError)
        self.assertEqual(outcome["error"].shortages[0].available, 0)
        self.assertEqual(outcome["error"].shortages[0].requested, 2)

        self.assertEqual(self.catalog.get("p-1").stock, 0)
        self.assertEqual([o.id for o in self.orders.all()], [order.id])
        self.assertFalse(rival_cart.is_empty)
