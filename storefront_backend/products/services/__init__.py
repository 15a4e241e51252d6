from .catalog import ProductService
from .exceptions import ProductNotFoundError

__all__ = [
    "ProductService",
    "ProductNotFoundError",
]
