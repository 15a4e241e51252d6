"""
PATH: products/models/product.py

PRODUCT

Catalog entry as stored in the remote `products` table.

Rules:
- price is a non-negative Decimal (2dp)
- stock is a non-negative integer (missing -> 0)
- tags keep their order
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWOPLACES = Decimal("0.01")


def money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    try:
        return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Invalid money amount: {v!r}") from exc


def _stock(v) -> int:
    try:
        return max(int(v or 0), 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class Product:
    id: str
    title: str
    price: Decimal
    description: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)
    image_url: str = ""
    stock: int = 0
    author: str = ""
    author_handle: str = ""
    created_at: str | None = None

    def __post_init__(self):
        if self.price < 0:
            raise ValueError("Product price must be non-negative")

    @classmethod
    def from_row(cls, row: dict) -> "Product":
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            description=row.get("description") or "",
            price=money(row.get("price")),
            category=row.get("category") or "",
            tags=list(row.get("tags") or []),
            image_url=row.get("image_url") or "",
            stock=_stock(row.get("stock")),
            author=row.get("author") or "",
            author_handle=row.get("author_handle") or "",
            created_at=row.get("created_at"),
        )
