# cart/services/account_store.py

"""
ACCOUNT CART STORE (REMOTE `carts` TABLE)

One row per (user_id, product_id) with an integer quantity.
Reads join the product row; the remote table is the source of truth.

Failure semantics:
- every write raises RemoteStoreError on failure
- no rollback of writes already applied
"""

from __future__ import annotations

import logging

from cart.models import CartItem
from cart.services.reconciliation import positive_qty
from products.models import Product

logger = logging.getLogger(__name__)

CARTS_TABLE = "carts"
CART_COLUMNS = "*,products(*)"


class RemoteAccountCartStore:
    def __init__(self, remote, user_id: str):
        self.remote = remote
        self.user_id = user_id

    def _key(self, product_id: str | None = None) -> dict:
        filters = {"user_id": self.user_id}
        if product_id is not None:
            filters["product_id"] = product_id
        return filters

    def load(self) -> list[CartItem]:
        rows = self.remote.select(CARTS_TABLE, columns=CART_COLUMNS, filters=self._key())
        items = []
        for row in rows:
            product_row = row.get("products")
            if not product_row:
                # product deleted since it was added
                logger.warning(
                    "Cart row references a missing product",
                    extra={"user_id": self.user_id, "product_id": row.get("product_id")},
                )
                continue
            quantity = int(row.get("quantity") or 0)
            if quantity <= 0:
                continue
            items.append(CartItem(product=Product.from_row(product_row), quantity=quantity))
        return items

    def add(self, product: Product, qty: int) -> None:
        qty = positive_qty(qty)
        existing = self.remote.select_one(CARTS_TABLE, filters=self._key(product.id))
        if existing:
            self.remote.update(
                CARTS_TABLE,
                {"quantity": int(existing.get("quantity") or 0) + qty},
                filters={"id": existing["id"]},
            )
            return

        self.remote.insert(
            CARTS_TABLE,
            {"user_id": self.user_id, "product_id": product.id, "quantity": qty},
        )

    def set_quantity(self, product_id: str, qty: int) -> None:
        if qty <= 0:
            self.remove(product_id)
            return
        self.remote.update(CARTS_TABLE, {"quantity": qty}, filters=self._key(product_id))

    def remove(self, product_id: str) -> None:
        self.remote.delete(CARTS_TABLE, filters=self._key(product_id))

    def clear(self) -> None:
        self.remote.delete(CARTS_TABLE, filters=self._key())
