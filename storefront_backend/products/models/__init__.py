"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .product import Product, money

__all__ = [
    "Product",
    "money",
]
