# orders/tests/test_checkout_api.py

"""
CHECKOUT TESTS

Run with:
    python manage.py test orders -v 2

Checkout touches:
Cart (guest session / remote carts) -> Orders (remote orders)
"""

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status

from remote.tests.fakes import RemoteStoreTestMixin

ADDRESS = {
    "name": "Asha Rao",
    "phone": "1234567890",
    "address_line1": "12 MG Road",
    "address_line2": "",
    "city": "Bengaluru",
    "state": "Karnataka",
    "pincode": "123456",
}


class CheckoutApiTests(RemoteStoreTestMixin, TestCase):
    """
    GUARANTEES:
    - Orders snapshot the server-side cart with server totals
    - Invalid input creates nothing
    - The cart is cleared after a successful order
    """

    def setUp(self):
        super().setUp()
        self.lamp = self.seed_product("Desk Lamp", "149.99")
        self.pots = self.seed_product("Cookware Set", "85.00", image_url="https://cdn.test/pots.png")

    def _add(self, product, quantity=1):
        self.client.post(
            reverse("cart:add-cart-item"),
            {"product_id": product["id"], "quantity": quantity},
            format="json",
        )

    def _checkout(self, address=None, payment_method="cod"):
        return self.client.post(
            reverse("orders:checkout"),
            {"shipping_address": address or ADDRESS, "payment_method": payment_method},
            format="json",
        )

    # =====================================================
    # HAPPY PATHS
    # =====================================================

    def test_signed_in_checkout_creates_pending_order_and_clears_cart(self):
        user = self.authenticate()
        self._add(self.lamp)
        self._add(self.pots, 2)

        response = self._checkout()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["user_id"], user["id"])
        self.assertEqual(response.data["subtotal_amount"], "319.99")
        self.assertEqual(response.data["shipping_fee"], "50.00")
        self.assertEqual(response.data["total_amount"], "369.99")
        self.assertFalse(response.data["is_paid"])
        self.assertTrue(response.data["cart_cleared"])

        stored = self.remote.rows("orders")[0]
        self.assertEqual(
            stored["items"][1],
            {
                "product_id": self.pots["id"],
                "title": "Cookware Set",
                "price": "85.00",
                "quantity": 2,
                "image_url": "https://cdn.test/pots.png",
            },
        )
        self.assertEqual(stored["shipping_address"]["pincode"], "123456")
        self.assertEqual(self.remote.rows("carts"), [])

    def test_prepaid_methods_are_marked_paid(self):
        self.authenticate()
        self._add(self.lamp)

        response = self._checkout(payment_method="razorpay")

        self.assertTrue(response.data["is_paid"])

    def test_guest_checkout_uses_session_cart(self):
        self._add(self.lamp)

        response = self._checkout()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data["user_id"])
        self.assertEqual(self.client.get(reverse("cart:cart")).data["items"], [])

    def test_checkout_prices_come_from_the_cart_not_the_request(self):
        self._add(self.lamp)

        payload = {"shipping_address": ADDRESS, "payment_method": "cod", "total_amount": "0.01"}
        response = self.client.post(reverse("orders:checkout"), payload, format="json")

        self.assertEqual(response.data["total_amount"], "199.99")

    # =====================================================
    # REJECTIONS (no side effects)
    # =====================================================

    def test_invalid_phone_is_rejected_without_side_effects(self):
        self._add(self.lamp)

        response = self._checkout(address=dict(ADDRESS, phone="123"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_ADDRESS")
        self.assertEqual(self.remote.rows("orders"), [])
        self.assertEqual(len(self.client.get(reverse("cart:cart")).data["items"]), 1)

    def test_missing_field_message(self):
        self._add(self.lamp)

        response = self._checkout(address=dict(ADDRESS, city=""))

        self.assertEqual(response.data["error"]["message"], "Please fill all required fields")

    def test_empty_cart_is_rejected(self):
        response = self._checkout()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "EMPTY_CART")

    def test_unknown_payment_method_is_rejected(self):
        self._add(self.lamp)

        response = self._checkout(payment_method="barter")

        self.assertEqual(response.data["error"]["code"], "INVALID_PAYMENT_METHOD")
        self.assertEqual(self.remote.rows("orders"), [])

    # =====================================================
    # PARTIAL FAILURE
    # =====================================================

    def test_order_stands_when_cart_clear_fails(self):
        self.authenticate()
        self._add(self.lamp)
        self.remote.fail("delete", "carts")

        response = self._checkout()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.data["cart_cleared"])
        self.assertEqual(len(self.remote.rows("orders")), 1)
        self.assertEqual(len(self.remote.rows("carts")), 1)

    def test_order_create_failure_keeps_cart(self):
        self.authenticate()
        self._add(self.lamp)
        self.remote.fail("insert", "orders")

        response = self._checkout()

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(len(self.remote.rows("carts")), 1)

    def test_retry_creates_a_second_order(self):
        self.authenticate()
        self._add(self.lamp)
        self._checkout()
        self._add(self.lamp)

        self._checkout()

        self.assertEqual(len(self.remote.rows("orders")), 2)
