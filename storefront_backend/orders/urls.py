"""
PATH: orders/urls.py

ORDERS URLS

Mounted at /api/orders/
"""

from django.urls import path

from orders.views import (
    AdminOrderListView,
    AdminOrderStatsView,
    CheckoutView,
    MyOrdersView,
    OrderDetailView,
    OrderPaymentUpdateView,
    OrderStatusUpdateView,
)

app_name = "orders"

urlpatterns = [
    path("", MyOrdersView.as_view(), name="my-orders"),
    path("checkout/", CheckoutView.as_view(), name="checkout"),
    path("admin/", AdminOrderListView.as_view(), name="admin-orders"),
    path("admin/stats/", AdminOrderStatsView.as_view(), name="admin-order-stats"),
    path("<str:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("<str:order_id>/status/", OrderStatusUpdateView.as_view(), name="order-status"),
    path("<str:order_id>/payment/", OrderPaymentUpdateView.as_view(), name="order-payment"),
]
