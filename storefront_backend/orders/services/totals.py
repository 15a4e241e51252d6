# orders/services/totals.py

"""
ORDER TOTALS POLICY

subtotal     = sum(unit price x quantity)
shipping_fee = 0 when subtotal > FREE_SHIPPING_THRESHOLD, else STANDARD_SHIPPING_FEE
total        = subtotal + shipping_fee

Pure and order-independent. Shared by the cart view and checkout so both
always agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from django.conf import settings

TWOPLACES = Decimal("0.01")

DEFAULT_FREE_SHIPPING_THRESHOLD = Decimal("500.00")
DEFAULT_STANDARD_SHIPPING_FEE = Decimal("50.00")


def _q(v: Decimal) -> Decimal:
    return Decimal(v).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    shipping_fee: Decimal
    total: Decimal


def free_shipping_threshold() -> Decimal:
    return _q(Decimal(str(getattr(settings, "FREE_SHIPPING_THRESHOLD", DEFAULT_FREE_SHIPPING_THRESHOLD))))


def standard_shipping_fee() -> Decimal:
    return _q(Decimal(str(getattr(settings, "STANDARD_SHIPPING_FEE", DEFAULT_STANDARD_SHIPPING_FEE))))


def calculate_subtotal(items: Iterable) -> Decimal:
    """
    items: anything exposing unit_price and quantity (CartItem, OrderLine-like).
    """
    total = Decimal("0.00")
    for item in items:
        price = getattr(item, "unit_price", None)
        if price is None:
            price = item.price
        total += Decimal(price) * Decimal(item.quantity)
    return _q(total)


def shipping_fee_for(subtotal: Decimal) -> Decimal:
    if _q(subtotal) > free_shipping_threshold():
        return Decimal("0.00")
    return standard_shipping_fee()


def compute_totals(items: Iterable) -> OrderTotals:
    subtotal = calculate_subtotal(items)
    fee = shipping_fee_for(subtotal)
    return OrderTotals(subtotal=subtotal, shipping_fee=fee, total=_q(subtotal + fee))
