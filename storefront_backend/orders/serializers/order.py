# orders/serializers/order.py

"""
ORDER SERIALIZERS

Input:
- CheckoutInputSerializer: address + payment method. Address fields are
  accepted blank here; the address rules (orders.services.address_validation)
  decide what is missing so the caller sees one message for the first rule.
- OrderStatusUpdateSerializer / PaymentStatusUpdateSerializer: admin commands

Output:
- OrderSerializer (from the Order dataclass); money as 2dp strings
"""

from rest_framework import serializers

from orders.models import Order


class AddressInputSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(required=False, allow_blank=True, default="")
    address_line1 = serializers.CharField(required=False, allow_blank=True, default="")
    address_line2 = serializers.CharField(required=False, allow_blank=True, default="")
    city = serializers.CharField(required=False, allow_blank=True, default="")
    state = serializers.CharField(required=False, allow_blank=True, default="")
    pincode = serializers.CharField(required=False, allow_blank=True, default="")


class CheckoutInputSerializer(serializers.Serializer):
    shipping_address = AddressInputSerializer()
    # checked by the order service (cod, razorpay, stripe)
    payment_method = serializers.CharField(required=False, allow_blank=True, default="cod")


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField()


class PaymentStatusUpdateSerializer(serializers.Serializer):
    is_paid = serializers.BooleanField()


class AddressSerializer(serializers.Serializer):
    name = serializers.CharField()
    phone = serializers.CharField()
    address_line1 = serializers.CharField()
    address_line2 = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    pincode = serializers.CharField()


class OrderLineSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    title = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    image_url = serializers.CharField()
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class OrderSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    user_id = serializers.CharField(allow_null=True)
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)
    payment_method = serializers.CharField()
    is_paid = serializers.BooleanField()
    shipping_address = AddressSerializer()
    items = OrderLineSerializer(many=True)
    subtotal_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    shipping_fee = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    created_at = serializers.CharField(allow_null=True)


class OrderStatsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_orders = serializers.IntegerField()
    completed_orders = serializers.IntegerField()
