# cart/views/api.py

"""
CART API VIEWS

Purpose:
- Cart lifecycle for guests (session) and signed-in users (remote store)
- Add / update / remove / clear items (server-owned pricing)

Hard rules:
- The backing store is picked by identity: bearer token -> account cart,
  otherwise the guest cart in the session.
- Money is server-owned: product data comes from the catalog, never the client.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.exception_handler import error_response
from cart.serializers import (
    AddCartItemInputSerializer,
    CartSerializer,
    UpdateCartItemInputSerializer,
)
from cart.services import CartItemNotFoundError, CartService
from products.services import ProductNotFoundError
from remote.middleware import remote_for_request


# =====================================================
# HELPERS
# =====================================================

def cart_service_for(request) -> CartService:
    return CartService(
        remote=remote_for_request(request),
        session=request.session,
        user=request.user,
    )


def cart_response(service: CartService, items, http_status=status.HTTP_200_OK):
    scope = "account" if service.is_account_cart else "guest"
    return Response(
        CartSerializer(items, context={"scope": scope}).data,
        status=http_status,
    )


# =====================================================
# CART API VIEWS
# =====================================================

class CartView(APIView):
    """
    Retrieve or clear the caller's cart.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        tags=["Cart"],
        responses={200: dict},
        description="Current cart with server-computed subtotal, shipping fee and total.",
    )
    def get(self, request):
        service = cart_service_for(request)
        return cart_response(service, service.get_cart())

    @extend_schema(
        tags=["Cart"],
        responses={200: dict},
        description="Remove every item from the cart.",
    )
    def delete(self, request):
        service = cart_service_for(request)
        service.clear()
        return cart_response(service, [])


class AddCartItemView(APIView):
    """
    Add a product to the cart (increments quantity if already present).
    """

    permission_classes = [AllowAny]

    @extend_schema(
        tags=["Cart"],
        request=AddCartItemInputSerializer,
        responses={200: dict, 404: OpenApiResponse(description="Product not found")},
    )
    def post(self, request):
        serializer = AddCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product_id = serializer.validated_data["product_id"]
        service = cart_service_for(request)

        try:
            items = service.add_item(product_id, int(serializer.validated_data["quantity"]))
        except ProductNotFoundError as exc:
            return error_response(
                code="PRODUCT_NOT_FOUND",
                message=str(exc),
                http_status=status.HTTP_404_NOT_FOUND,
            )

        return cart_response(service, items)


class CartItemView(APIView):
    """
    Update quantity of, or remove, one cart line (by product id).
    """

    permission_classes = [AllowAny]

    @extend_schema(
        tags=["Cart"],
        request=UpdateCartItemInputSerializer,
        responses={200: dict, 404: OpenApiResponse(description="Item not in cart")},
        description="Set the quantity of a cart line; 0 or less removes it.",
    )
    def patch(self, request, product_id):
        serializer = UpdateCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = cart_service_for(request)
        try:
            items = service.set_quantity(product_id, int(serializer.validated_data["quantity"]))
        except CartItemNotFoundError as exc:
            return error_response(
                code="CART_ITEM_NOT_FOUND",
                message=str(exc),
                http_status=status.HTTP_404_NOT_FOUND,
            )

        return cart_response(service, items)

    @extend_schema(
        tags=["Cart"],
        responses={200: dict},
        description="Remove a product from the cart.",
    )
    def delete(self, request, product_id):
        service = cart_service_for(request)
        return cart_response(service, service.remove_item(product_id))
