from .api import AddCartItemView, CartItemView, CartView

__all__ = [
    "CartView",
    "AddCartItemView",
    "CartItemView",
]
