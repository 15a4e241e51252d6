from .cart_service import CartService
from .exceptions import CartError, CartItemNotFoundError

__all__ = [
    "CartService",
    "CartError",
    "CartItemNotFoundError",
]
