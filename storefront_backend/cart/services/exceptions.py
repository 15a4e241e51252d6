# cart/services/exceptions.py


class CartError(Exception):
    pass


class CartItemNotFoundError(CartError):
    pass
