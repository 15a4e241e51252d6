from .order import (
    PAYMENT_COD,
    PAYMENT_METHODS,
    PAYMENT_RAZORPAY,
    PAYMENT_STRIPE,
    Address,
    Order,
    OrderLine,
)

__all__ = [
    "Address",
    "Order",
    "OrderLine",
    "PAYMENT_COD",
    "PAYMENT_RAZORPAY",
    "PAYMENT_STRIPE",
    "PAYMENT_METHODS",
]
