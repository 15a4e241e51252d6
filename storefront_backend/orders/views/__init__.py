from .checkout import CheckoutView
from .order import (
    AdminOrderListView,
    AdminOrderStatsView,
    MyOrdersView,
    OrderDetailView,
    OrderPaymentUpdateView,
    OrderStatusUpdateView,
)

__all__ = [
    "CheckoutView",
    "MyOrdersView",
    "OrderDetailView",
    "AdminOrderListView",
    "AdminOrderStatsView",
    "OrderStatusUpdateView",
    "OrderPaymentUpdateView",
]
