from .order import (
    AddressInputSerializer,
    CheckoutInputSerializer,
    OrderSerializer,
    OrderStatsSerializer,
    OrderStatusUpdateSerializer,
    PaymentStatusUpdateSerializer,
)

__all__ = [
    "AddressInputSerializer",
    "CheckoutInputSerializer",
    "OrderSerializer",
    "OrderStatsSerializer",
    "OrderStatusUpdateSerializer",
    "PaymentStatusUpdateSerializer",
]
