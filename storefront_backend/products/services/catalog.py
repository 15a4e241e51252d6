# products/services/catalog.py

"""
PRODUCT CATALOG SERVICE

Purpose:
- Storefront reads: list, lookup, category filter, search
- Admin writes: create, partial update, delete
- Product images in object storage (bucket from settings.REMOTE_STORE)

Rules:
- Reads return whatever the remote store returns (empty when unconfigured).
- Writes raise RemoteStoreError on failure; nothing is retried.
- Image removal is best effort and never raises.
"""

from __future__ import annotations

import logging
import os
import time
from urllib.parse import unquote

from products.models import Product, money
from products.services.exceptions import ProductNotFoundError
from remote.exceptions import RemoteStoreError
from remote.factory import product_bucket

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products"

SEARCH_COLUMNS = ["title", "description", "category"]

WRITABLE_FIELDS = (
    "title",
    "description",
    "price",
    "image_url",
    "category",
    "tags",
    "stock",
    "author",
    "author_handle",
)


def _row_values(data: dict) -> dict:
    """
    Keep only writable columns that were actually supplied.
    """
    values = {}
    for name in WRITABLE_FIELDS:
        if name not in data:
            continue
        value = data[name]
        if name == "price":
            value = str(money(value))
        elif name == "stock":
            value = int(value or 0)
        elif name == "tags":
            value = [str(t).strip() for t in (value or []) if str(t).strip()]
        values[name] = value
    return values


class ProductService:
    def __init__(self, remote, *, bucket: str | None = None):
        self.remote = remote
        self.bucket = bucket or product_bucket()

    # -------------------------------------------------
    # reads
    # -------------------------------------------------

    def get_all_products(self) -> list[Product]:
        rows = self.remote.select(PRODUCTS_TABLE, order_by="created_at", descending=True)
        return [Product.from_row(r) for r in rows]

    def get_product_by_id(self, product_id: str) -> Product | None:
        row = self.remote.select_one(PRODUCTS_TABLE, filters={"id": product_id})
        return Product.from_row(row) if row else None

    def require_product(self, product_id: str) -> Product:
        product = self.get_product_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product {product_id} not found")
        return product

    def get_products_by_category(self, category: str) -> list[Product]:
        rows = self.remote.select(
            PRODUCTS_TABLE,
            filters={"category": category},
            order_by="created_at",
            descending=True,
        )
        return [Product.from_row(r) for r in rows]

    def search_products(self, term: str) -> list[Product]:
        if not (term or "").strip():
            return self.get_all_products()
        rows = self.remote.search(
            PRODUCTS_TABLE,
            term=term,
            columns=SEARCH_COLUMNS,
            order_by="created_at",
            descending=True,
        )
        return [Product.from_row(r) for r in rows]

    # -------------------------------------------------
    # admin writes
    # -------------------------------------------------

    def add_product(self, data: dict) -> str:
        values = _row_values(data)
        values.setdefault("stock", 0)
        values.setdefault("tags", [])
        row = self.remote.insert(PRODUCTS_TABLE, values)
        logger.info("Product created", extra={"product_id": row.get("id")})
        return str(row["id"])

    def update_product(self, product_id: str, data: dict) -> Product:
        values = _row_values(data)
        if not values:
            return self.require_product(product_id)

        rows = self.remote.update(PRODUCTS_TABLE, values, filters={"id": product_id})
        if not rows:
            raise ProductNotFoundError(f"Product {product_id} not found")
        return Product.from_row(rows[0])

    def delete_product(self, product_id: str) -> None:
        product = self.get_product_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product {product_id} not found")
        self.remote.delete(PRODUCTS_TABLE, filters={"id": product_id})
        if product.image_url:
            self.delete_product_image(product.image_url)
        logger.info("Product deleted", extra={"product_id": product_id})

    # -------------------------------------------------
    # images
    # -------------------------------------------------

    def upload_product_image(self, uploaded_file, product_id: str) -> str:
        """
        Store the file as <productId>-<unix ms>.<ext>; returns its public URL.
        """
        name = getattr(uploaded_file, "name", "") or ""
        ext = os.path.splitext(name)[1].lstrip(".").lower() or "bin"
        path = f"{product_id}-{int(time.time() * 1000)}.{ext}"

        content_type = getattr(uploaded_file, "content_type", None) or "application/octet-stream"
        self.remote.upload(
            self.bucket,
            path,
            uploaded_file.read(),
            content_type=content_type,
            cache_control="3600",
            upsert=False,
        )
        return self.remote.public_url(self.bucket, path)

    def delete_product_image(self, image_url: str) -> None:
        marker = f"/{self.bucket}/"
        if not image_url or marker not in image_url:
            return

        path = unquote(image_url.split(marker, 1)[1])
        try:
            self.remote.remove(self.bucket, [path])
        except RemoteStoreError:
            logger.warning("Error deleting image", extra={"path": path})
