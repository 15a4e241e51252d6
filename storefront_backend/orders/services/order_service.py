# orders/services/order_service.py

"""
ORDER SERVICE

Remote `orders` table access:
- create_order(): snapshot cart lines + server totals, status pending
- customer reads (own orders) and admin reads (all orders, stats)
- admin writes: fulfilment status (lifecycle-guarded) and payment flag

Failure semantics:
- reads propagate RemoteStoreError (an unconfigured store returns empty)
- writes raise RemoteStoreError / RemoteStoreNotConfigured
"""

from __future__ import annotations

import logging
from decimal import Decimal

from orders.models import PAYMENT_COD, PAYMENT_METHODS, Address, Order, OrderLine
from orders.services.exceptions import (
    EmptyCartError,
    InvalidPaymentMethodError,
    OrderNotFoundError,
)
from orders.services.order_lifecycle import validate_transition
from orders.services.totals import compute_totals

logger = logging.getLogger(__name__)

ORDERS_TABLE = "orders"


def normalize_payment_method(method: str | None) -> str:
    m = (method or "").strip().lower()
    if m not in PAYMENT_METHODS:
        raise InvalidPaymentMethodError(
            f"Unsupported payment method '{method}'. Use one of: {', '.join(PAYMENT_METHODS)}"
        )
    return m


class OrderService:
    def __init__(self, remote):
        self.remote = remote

    # -------------------------------------------------
    # create
    # -------------------------------------------------

    def create_order(
        self,
        *,
        user_id: str | None,
        items,
        shipping_address: Address,
        payment_method: str,
    ) -> Order:
        items = list(items)
        if not items:
            raise EmptyCartError("Your cart is empty")

        method = normalize_payment_method(payment_method)
        totals = compute_totals(items)
        lines = [OrderLine.from_cart_item(item) for item in items]

        row = self.remote.insert(
            ORDERS_TABLE,
            {
                "user_id": user_id,
                "items": [line.to_row() for line in lines],
                "subtotal_amount": str(totals.subtotal),
                "shipping_fee": str(totals.shipping_fee),
                "total_amount": str(totals.total),
                "shipping_address": shipping_address.to_row(),
                "payment_method": method,
                "status": Order.STATUS_PENDING,
                # cash on delivery is collected later
                "is_paid": method != PAYMENT_COD,
            },
        )

        order = Order.from_row(row)
        logger.info(
            "Order created",
            extra={
                "order_id": order.id,
                "user_id": user_id,
                "total_amount": str(order.total_amount),
                "payment_method": method,
            },
        )
        return order

    # -------------------------------------------------
    # reads
    # -------------------------------------------------

    def get_order_by_id(self, order_id: str) -> Order | None:
        row = self.remote.select_one(ORDERS_TABLE, filters={"id": order_id})
        return Order.from_row(row) if row else None

    def require_order(self, order_id: str) -> Order:
        order = self.get_order_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order {order_id} not found")
        return order

    def get_user_orders(self, user_id: str) -> list[Order]:
        rows = self.remote.select(
            ORDERS_TABLE,
            filters={"user_id": user_id},
            order_by="created_at",
            descending=True,
        )
        return [Order.from_row(r) for r in rows]

    def get_all_orders(self) -> list[Order]:
        rows = self.remote.select(ORDERS_TABLE, order_by="created_at", descending=True)
        return [Order.from_row(r) for r in rows]

    def get_order_stats(self) -> dict:
        rows = self.remote.select(ORDERS_TABLE, columns="total_amount,status,is_paid")

        revenue = Decimal("0.00")
        pending = 0
        completed = 0
        for row in rows:
            if row.get("is_paid"):
                revenue += Decimal(str(row.get("total_amount") or "0"))
            if row.get("status") == Order.STATUS_PENDING:
                pending += 1
            elif row.get("status") == Order.STATUS_DELIVERED:
                completed += 1

        return {
            "total_orders": len(rows),
            "total_revenue": revenue.quantize(Decimal("0.01")),
            "pending_orders": pending,
            "completed_orders": completed,
        }

    # -------------------------------------------------
    # admin writes
    # -------------------------------------------------

    def update_order_status(self, order_id: str, new_status: str) -> Order:
        if new_status not in Order.statuses():
            raise ValueError(f"Unknown order status '{new_status}'")

        order = self.require_order(order_id)
        validate_transition(order=order, target_status=new_status)

        rows = self.remote.update(
            ORDERS_TABLE,
            {"status": new_status},
            filters={"id": order_id},
        )
        if not rows:
            raise OrderNotFoundError(f"Order {order_id} not found")

        logger.info(
            "Order status changed",
            extra={"order_id": order_id, "from": order.status, "to": new_status},
        )
        return Order.from_row(rows[0])

    def update_payment_status(self, order_id: str, is_paid: bool) -> Order:
        rows = self.remote.update(
            ORDERS_TABLE,
            {"is_paid": bool(is_paid)},
            filters={"id": order_id},
        )
        if not rows:
            raise OrderNotFoundError(f"Order {order_id} not found")

        logger.info("Order payment flag changed", extra={"order_id": order_id, "is_paid": bool(is_paid)})
        return Order.from_row(rows[0])
