# products/urls.py

"""
PRODUCTS URLS

Mounted at /api/products/
"""

from django.urls import path

from products.views import ProductDetailView, ProductImageUploadView, ProductListView

app_name = "products"

urlpatterns = [
    path("", ProductListView.as_view(), name="product-list"),
    path("<str:product_id>/", ProductDetailView.as_view(), name="product-detail"),
    path("<str:product_id>/image/", ProductImageUploadView.as_view(), name="product-image"),
]
