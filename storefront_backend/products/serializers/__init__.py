# products/serializers/__init__.py

from .product import (
    ProductImageUploadSerializer,
    ProductSerializer,
    ProductUpdateSerializer,
    ProductWriteSerializer,
)

__all__ = [
    "ProductSerializer",
    "ProductWriteSerializer",
    "ProductUpdateSerializer",
    "ProductImageUploadSerializer",
]
