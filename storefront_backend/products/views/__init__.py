# products/views/__init__.py

"""
Products views package exports.
"""

from .product import ProductDetailView, ProductImageUploadView, ProductListView

__all__ = [
    "ProductListView",
    "ProductDetailView",
    "ProductImageUploadView",
]
