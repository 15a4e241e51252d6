# orders/services/checkout_orchestrator.py

"""
CHECKOUT ORCHESTRATOR (APPLICATION SERVICE)

Purpose:
- Turn the caller's cart into a pending Order.

Steps:
1. Validate the shipping address (first violated rule aborts, no side effect)
2. Validate payment method, reject an empty cart
3. Create the order from the server-side cart (prices + totals server-owned)
4. Clear the cart (account cart when signed in, guest session otherwise)

Hard rules:
- Steps 1-2 never touch the remote store.
- Order creation and cart clearing are NOT atomic: if clearing fails the
  order stands, the failure is logged and reported as cart_cleared=False.
- Checkout is not idempotent; a retried request creates a second order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cart.services import CartService
from orders.models import Order
from orders.services.address_validation import validate_address
from orders.services.exceptions import EmptyCartError
from orders.services.order_service import OrderService, normalize_payment_method
from remote.exceptions import RemoteStoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutResult:
    order: Order
    cart_cleared: bool


def checkout(
    *,
    remote,
    session,
    user=None,
    shipping_address: dict,
    payment_method: str,
) -> CheckoutResult:
    address = validate_address(shipping_address or {})
    method = normalize_payment_method(payment_method)

    cart = CartService(remote=remote, session=session, user=user)
    items = cart.get_cart()
    if not items:
        raise EmptyCartError("Your cart is empty")

    user_id = cart.user.id if cart.user is not None else None

    order = OrderService(remote).create_order(
        user_id=user_id,
        items=items,
        shipping_address=address,
        payment_method=method,
    )

    cart_cleared = True
    try:
        cart.clear()
    except RemoteStoreError:
        cart_cleared = False
        logger.exception(
            "Order placed but cart could not be cleared",
            extra={"order_id": order.id, "user_id": user_id},
        )

    return CheckoutResult(order=order, cart_cleared=cart_cleared)
