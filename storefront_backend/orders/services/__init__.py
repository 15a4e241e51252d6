from .exceptions import (
    AddressValidationError,
    EmptyCartError,
    InvalidPaymentMethodError,
    OrderError,
    OrderNotFoundError,
)
from .order_lifecycle import InvalidOrderTransitionError
from .order_service import OrderService

__all__ = [
    "OrderService",
    "OrderError",
    "OrderNotFoundError",
    "EmptyCartError",
    "InvalidPaymentMethodError",
    "AddressValidationError",
    "InvalidOrderTransitionError",
]
