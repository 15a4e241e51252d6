# cart/services/reconciliation.py

"""
CART RECONCILIATION RULES

Pure operations over a cart (list of CartItem).

DESIGN PRINCIPLES:
- No remote calls
- No session access
- Inputs are never mutated; every operation returns a new list
- One entry per product id; re-adding merges by incrementing quantity
"""

from __future__ import annotations

from typing import Iterable

from cart.models import CartItem
from products.models import Product


def positive_qty(qty) -> int:
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise ValueError("quantity must be a whole integer unit")
    if qty <= 0:
        raise ValueError("quantity must be greater than zero")
    return qty


def add_item(cart: Iterable[CartItem], product: Product, qty: int = 1) -> list[CartItem]:
    qty = positive_qty(qty)
    items = list(cart)

    for index, item in enumerate(items):
        if item.product_id == product.id:
            items[index] = item.with_quantity(item.quantity + qty)
            return items

    items.append(CartItem(product=product, quantity=qty))
    return items


def remove_item(cart: Iterable[CartItem], product_id: str) -> list[CartItem]:
    return [item for item in cart if item.product_id != product_id]


def set_quantity(cart: Iterable[CartItem], product_id: str, qty: int) -> list[CartItem]:
    if qty <= 0:
        return remove_item(cart, product_id)

    return [
        item.with_quantity(qty) if item.product_id == product_id else item
        for item in cart
    ]


def merge_carts(base: Iterable[CartItem], incoming: Iterable[CartItem]) -> list[CartItem]:
    merged = list(base)
    for item in incoming:
        merged = add_item(merged, item.product, item.quantity)
    return merged


def item_count(cart: Iterable[CartItem]) -> int:
    return sum(item.quantity for item in cart)
