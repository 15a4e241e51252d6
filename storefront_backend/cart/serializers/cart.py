# cart/serializers/cart.py

"""
CART SERIALIZERS

Purpose:
- Return a cart in a frontend-friendly shape.
- Keep money + totals server-derived (single source of truth).

Totals use the checkout policy (orders.services.totals), so the cart drawer
and the order agree on subtotal, shipping fee and total.
"""

from rest_framework import serializers

from cart.services.reconciliation import item_count
from orders.services.totals import compute_totals


class AddCartItemInputSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemInputSerializer(serializers.Serializer):
    # 0 or less removes the line
    quantity = serializers.IntegerField()


class CartItemSerializer(serializers.Serializer):
    product_id = serializers.CharField(read_only=True)
    title = serializers.CharField(source="product.title", read_only=True)
    image_url = serializers.CharField(source="product.image_url", read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


class CartSerializer(serializers.Serializer):
    """
    Serializes a list of CartItem as a cart document.
    """

    def to_representation(self, items):
        items = list(items)
        totals = compute_totals(items)
        return {
            "scope": self.context.get("scope", "guest"),
            "items": CartItemSerializer(items, many=True).data,
            "item_count": item_count(items),
            "subtotal_amount": f"{totals.subtotal:.2f}",
            "shipping_fee": f"{totals.shipping_fee:.2f}",
            "total_amount": f"{totals.total:.2f}",
        }
