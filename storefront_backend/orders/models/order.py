# orders/models/order.py

"""
ORDER

Snapshot of a cart at checkout, as stored in the remote `orders` table.

GUARANTEES:
- Items carry the unit price at time of purchase (later catalog edits
  never change an order)
- total_amount = subtotal_amount + shipping_fee (computed server-side)
- After creation only `status` (via the lifecycle rules) and `is_paid` change
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from products.models import money

PAYMENT_COD = "cod"
PAYMENT_RAZORPAY = "razorpay"
PAYMENT_STRIPE = "stripe"

PAYMENT_METHODS = (PAYMENT_COD, PAYMENT_RAZORPAY, PAYMENT_STRIPE)


@dataclass(frozen=True)
class Address:
    name: str
    phone: str
    address_line1: str
    city: str
    state: str
    pincode: str
    address_line2: str = ""

    @classmethod
    def from_row(cls, row: dict | None) -> "Address":
        row = row or {}
        return cls(
            name=row.get("name") or "",
            phone=row.get("phone") or "",
            address_line1=row.get("address_line1") or "",
            address_line2=row.get("address_line2") or "",
            city=row.get("city") or "",
            state=row.get("state") or "",
            pincode=row.get("pincode") or "",
        )

    def to_row(self) -> dict:
        return {
            "name": self.name,
            "phone": self.phone,
            "address_line1": self.address_line1,
            "address_line2": self.address_line2,
            "city": self.city,
            "state": self.state,
            "pincode": self.pincode,
        }


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    title: str
    price: Decimal
    quantity: int
    image_url: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.price * Decimal(self.quantity)

    @classmethod
    def from_cart_item(cls, item) -> "OrderLine":
        return cls(
            product_id=item.product_id,
            title=item.product.title,
            price=item.unit_price,
            quantity=item.quantity,
            image_url=item.product.image_url,
        )

    @classmethod
    def from_row(cls, row: dict) -> "OrderLine":
        return cls(
            product_id=str(row.get("product_id") or ""),
            title=row.get("title") or "",
            price=money(row.get("price")),
            quantity=int(row.get("quantity") or 0),
            image_url=row.get("image_url") or "",
        )

    def to_row(self) -> dict:
        return {
            "product_id": self.product_id,
            "title": self.title,
            "price": str(self.price),
            "quantity": self.quantity,
            "image_url": self.image_url,
        }


@dataclass(frozen=True)
class Order:
    STATUS_PENDING = "pending"
    STATUS_PROCESSING = "processing"
    STATUS_SHIPPED = "shipped"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    id: str
    user_id: str | None
    status: str
    payment_method: str
    is_paid: bool
    shipping_address: Address
    items: list[OrderLine] = field(default_factory=list)
    subtotal_amount: Decimal = Decimal("0.00")
    shipping_fee: Decimal = Decimal("0.00")
    total_amount: Decimal = Decimal("0.00")
    created_at: str | None = None

    @classmethod
    def statuses(cls) -> tuple[str, ...]:
        return tuple(value for value, _label in cls.STATUS_CHOICES)

    @classmethod
    def from_row(cls, row: dict) -> "Order":
        total = money(row.get("total_amount"))
        fee = money(row.get("shipping_fee"))
        # rows written before subtotal/fee were stored only carry the total
        subtotal = (
            money(row.get("subtotal_amount"))
            if row.get("subtotal_amount") is not None
            else total - fee
        )
        user_id = row.get("user_id")
        return cls(
            id=str(row["id"]),
            user_id=str(user_id) if user_id else None,
            status=row.get("status") or cls.STATUS_PENDING,
            payment_method=row.get("payment_method") or "",
            is_paid=bool(row.get("is_paid")),
            shipping_address=Address.from_row(row.get("shipping_address")),
            items=[OrderLine.from_row(r) for r in (row.get("items") or [])],
            subtotal_amount=subtotal,
            shipping_fee=fee,
            total_amount=total,
            created_at=row.get("created_at"),
        )

    def __str__(self):
        return f"Order {self.id} ({self.status})"
