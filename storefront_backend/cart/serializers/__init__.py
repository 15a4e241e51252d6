from .cart import (
    AddCartItemInputSerializer,
    CartItemSerializer,
    CartSerializer,
    UpdateCartItemInputSerializer,
)

__all__ = [
    "AddCartItemInputSerializer",
    "UpdateCartItemInputSerializer",
    "CartItemSerializer",
    "CartSerializer",
]
