"""
PATH: cart/urls.py

CART URLS

Mounted at /api/cart/
"""

from django.urls import path

from cart.views import AddCartItemView, CartItemView, CartView

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("items/", AddCartItemView.as_view(), name="add-cart-item"),
    path("items/<str:product_id>/", CartItemView.as_view(), name="cart-item"),
]
