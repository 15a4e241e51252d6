# cart/models/cart_item.py

"""
CART ITEM

One line of a cart: a product (snapshot) and a positive integer quantity.

Rules:
- quantity > 0 (zero/negative quantities are removals, never stored)
- at most one CartItem per product_id within a cart (enforced by the
  reconciliation operations, see cart.services.reconciliation)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from products.models import Product, money


@dataclass(frozen=True)
class CartItem:
    product: Product
    quantity: int

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("quantity must be a whole integer unit")
        if self.quantity <= 0:
            raise ValueError("Quantity must be greater than zero")

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def unit_price(self) -> Decimal:
        return self.product.price

    @property
    def line_total(self) -> Decimal:
        return self.product.price * Decimal(self.quantity)

    def with_quantity(self, quantity: int) -> "CartItem":
        return CartItem(product=self.product, quantity=quantity)

    def to_snapshot(self) -> dict:
        # cart and checkout read nothing else from the guest snapshot
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "title": self.product.title,
            "price": str(self.product.price),
            "image_url": self.product.image_url,
        }

    @classmethod
    def from_snapshot(cls, data: dict) -> "CartItem":
        product = Product(
            id=str(data["product_id"]),
            title=data.get("title") or "",
            price=money(data.get("price")),
            image_url=data.get("image_url") or "",
        )
        return cls(product=product, quantity=int(data["quantity"]))

    def __str__(self):
        return f"{self.product.title or 'Product'} x {self.quantity}"
