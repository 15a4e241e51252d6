# orders/views/checkout.py
"""
CHECKOUT

POST /api/orders/checkout/

- Guests and signed-in users (cart picked by identity)
- Prices and totals come from the server-side cart, never the request body
- Throttled (checkout scope) because it's a write endpoint (abuse target)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from backend.exception_handler import error_response
from orders.serializers import CheckoutInputSerializer, OrderSerializer
from orders.services import (
    AddressValidationError,
    EmptyCartError,
    InvalidPaymentMethodError,
)
from orders.services.checkout_orchestrator import checkout
from remote.middleware import remote_for_request


class CheckoutView(APIView):
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "checkout"

    @extend_schema(
        tags=["Checkout"],
        request=CheckoutInputSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="Invalid address / payment method / empty cart"),
            429: OpenApiResponse(description="Rate limited"),
        },
        description=(
            "Place an order from the current cart. The order is created as pending; "
            "the cart is cleared afterwards (cart_cleared reports whether that worked)."
        ),
    )
    def post(self, request):
        s = CheckoutInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            result = checkout(
                remote=remote_for_request(request),
                session=request.session,
                user=request.user,
                shipping_address=data["shipping_address"],
                payment_method=data.get("payment_method"),
            )
        except AddressValidationError as exc:
            return error_response(
                code="INVALID_ADDRESS",
                message=exc.message,
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except InvalidPaymentMethodError as exc:
            return error_response(
                code="INVALID_PAYMENT_METHOD",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except EmptyCartError as exc:
            return error_response(
                code="EMPTY_CART",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        payload = OrderSerializer(result.order).data
        payload["cart_cleared"] = result.cart_cleared
        return Response(payload, status=status.HTTP_201_CREATED)
