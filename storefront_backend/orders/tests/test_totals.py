# orders/tests/test_totals.py

from decimal import Decimal
from itertools import permutations

from django.test import SimpleTestCase, override_settings

from cart.models import CartItem
from orders.services.totals import calculate_subtotal, compute_totals, shipping_fee_for
from products.models import Product


def _item(pid, price, qty):
    return CartItem(product=Product.from_row({"id": pid, "title": pid, "price": price}), quantity=qty)


class OrderTotalsTests(SimpleTestCase):
    """
    GUARANTEES:
    - subtotal = sum(price x quantity), independent of line order
    - free shipping strictly above the threshold
    - total = subtotal + shipping_fee
    """

    def test_lamp_and_cookware_example(self):
        totals = compute_totals([_item("lamp", "149.99", 1), _item("pots", "85.00", 2)])

        self.assertEqual(totals.subtotal, Decimal("319.99"))
        self.assertEqual(totals.shipping_fee, Decimal("50.00"))
        self.assertEqual(totals.total, Decimal("369.99"))

    def test_just_above_threshold_ships_free(self):
        totals = compute_totals([_item("watch", "501.00", 1)])

        self.assertEqual(totals.shipping_fee, Decimal("0.00"))
        self.assertEqual(totals.total, Decimal("501.00"))

    def test_fee_boundary(self):
        self.assertEqual(shipping_fee_for(Decimal("500.00")), Decimal("50.00"))
        self.assertEqual(shipping_fee_for(Decimal("500.01")), Decimal("0.00"))
        self.assertEqual(shipping_fee_for(Decimal("0.00")), Decimal("50.00"))

    def test_subtotal_is_order_independent(self):
        items = [_item("a", "0.10", 3), _item("b", "19.99", 1), _item("c", "7.35", 4)]
        expected = calculate_subtotal(items)

        for ordering in permutations(items):
            with self.subTest(order=[i.product_id for i in ordering]):
                self.assertEqual(calculate_subtotal(ordering), expected)

    @override_settings(FREE_SHIPPING_THRESHOLD=Decimal("100"), STANDARD_SHIPPING_FEE=Decimal("9.5"))
    def test_policy_comes_from_settings(self):
        totals = compute_totals([_item("a", "100.00", 1)])

        self.assertEqual(totals.shipping_fee, Decimal("9.50"))
        self.assertEqual(compute_totals([_item("a", "100.01", 1)]).shipping_fee, Decimal("0.00"))
