# cart/services/cart_service.py

"""
CART SERVICE (APPLICATION SERVICE)

Routes every cart operation to exactly one backing store:
- signed-in user -> RemoteAccountCartStore (remote `carts` table)
- anonymous      -> SessionGuestCartStore (session key `guest_cart`)

Rules:
- Product data is resolved from the catalog on add (client never sends prices).
- Added quantities must be positive whole units for both stores.
- Guest mutations go through the pure reconciliation rules.
- Account mutations are written straight to the remote store; remote failures
  propagate (RemoteStoreError) and nothing is rolled back.

Merge on login:
- Guest items are folded into the account cart with the add rule
  (existing rows are incremented), then removed from the guest store.
- Items are removed from the guest store one by one as they merge, so a failed
  merge can be retried without double-adding.
"""

from __future__ import annotations

import logging

from cart.models import CartItem
from cart.services import reconciliation
from cart.services.account_store import RemoteAccountCartStore
from cart.services.exceptions import CartItemNotFoundError
from cart.services.guest_store import SessionGuestCartStore
from products.services import ProductService

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, *, remote, session, user=None):
        self.remote = remote
        self.user = user if getattr(user, "is_authenticated", False) else None
        self.guest = SessionGuestCartStore(session)
        self.account = (
            RemoteAccountCartStore(remote, self.user.id) if self.user is not None else None
        )
        self.products = ProductService(remote)

    @property
    def is_account_cart(self) -> bool:
        return self.account is not None

    # -------------------------------------------------
    # reads
    # -------------------------------------------------

    def get_cart(self) -> list[CartItem]:
        if self.account is not None:
            return self.account.load()
        return self.guest.load()

    # -------------------------------------------------
    # mutations
    # -------------------------------------------------

    def add_item(self, product_id: str, quantity: int = 1) -> list[CartItem]:
        quantity = reconciliation.positive_qty(quantity)
        product = self.products.require_product(product_id)

        if self.account is not None:
            self.account.add(product, quantity)
        else:
            self.guest.save(reconciliation.add_item(self.guest.load(), product, quantity))

        return self.get_cart()

    def set_quantity(self, product_id: str, quantity: int) -> list[CartItem]:
        current = self.get_cart()
        if not any(item.product_id == product_id for item in current):
            raise CartItemNotFoundError(f"Product {product_id} is not in the cart")

        if self.account is not None:
            self.account.set_quantity(product_id, quantity)
            return self.get_cart()

        updated = reconciliation.set_quantity(current, product_id, quantity)
        self.guest.save(updated)
        return updated

    def remove_item(self, product_id: str) -> list[CartItem]:
        if self.account is not None:
            self.account.remove(product_id)
            return self.get_cart()

        updated = reconciliation.remove_item(self.guest.load(), product_id)
        self.guest.save(updated)
        return updated

    def clear(self) -> None:
        if self.account is not None:
            self.account.clear()
        else:
            self.guest.clear()

    # -------------------------------------------------
    # login reconciliation
    # -------------------------------------------------

    def merge_guest_cart_into_account(self) -> int:
        """
        Returns the number of guest lines merged into the account cart.
        """
        if self.account is None:
            raise ValueError("merge requires a signed-in user")

        pending = self.guest.load()
        if not pending:
            self.guest.clear()
            return 0

        merged = 0
        while pending:
            item = pending[0]
            product = self.products.get_product_by_id(item.product_id)
            if product is None:
                logger.warning(
                    "Skipping guest cart item for missing product",
                    extra={"product_id": item.product_id},
                )
            else:
                self.account.add(product, item.quantity)
                merged += 1
            pending = pending[1:]
            self.guest.save(pending)

        self.guest.clear()
        logger.info(
            "Guest cart merged into account cart",
            extra={"user_id": self.user.id, "lines": merged},
        )
        return merged
