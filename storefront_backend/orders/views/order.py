# orders/views/order.py

"""
ORDER VIEWS

Customer:
- GET /api/orders/            own orders, newest first
- GET /api/orders/<id>/       own order (admins may read any)

Admin (IsAdmin):
- GET   /api/orders/admin/         all orders, newest first
- GET   /api/orders/admin/stats/   dashboard counters
- PATCH /api/orders/<id>/status/   fulfilment transition (lifecycle-guarded)
- PATCH /api/orders/<id>/payment/  payment flag
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.exception_handler import error_response
from orders.serializers import (
    OrderSerializer,
    OrderStatsSerializer,
    OrderStatusUpdateSerializer,
    PaymentStatusUpdateSerializer,
)
from orders.services import (
    InvalidOrderTransitionError,
    OrderNotFoundError,
    OrderService,
)
from remote.middleware import remote_for_request
from users.permissions import IsAdmin


def _not_found(order_id: str):
    return error_response(
        code="ORDER_NOT_FOUND",
        message=f"Order {order_id} not found",
        http_status=status.HTTP_404_NOT_FOUND,
    )


# =====================================================
# CUSTOMER
# =====================================================

class MyOrdersView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Orders"], responses={200: OrderSerializer(many=True)})
    def get(self, request):
        orders = OrderService(remote_for_request(request)).get_user_orders(request.user.id)
        return Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Orders"],
        responses={200: OrderSerializer, 404: OpenApiResponse(description="Not found")},
    )
    def get(self, request, order_id):
        order = OrderService(remote_for_request(request)).get_order_by_id(order_id)

        # other customers' orders are reported as missing
        if order is None or (not request.user.is_admin and order.user_id != request.user.id):
            return _not_found(order_id)

        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


# =====================================================
# ADMIN
# =====================================================

class AdminOrderListView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(tags=["Orders Admin"], responses={200: OrderSerializer(many=True)})
    def get(self, request):
        orders = OrderService(remote_for_request(request)).get_all_orders()
        return Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)


class AdminOrderStatsView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(tags=["Orders Admin"], responses={200: OrderStatsSerializer})
    def get(self, request):
        stats = OrderService(remote_for_request(request)).get_order_stats()
        return Response(OrderStatsSerializer(stats).data, status=status.HTTP_200_OK)


class OrderStatusUpdateView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        tags=["Orders Admin"],
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(description="Unknown status"),
            404: OpenApiResponse(description="Not found"),
            409: OpenApiResponse(description="Transition not allowed"),
        },
        description=(
            "Move an order along its fulfilment lifecycle: pending -> processing -> "
            "shipped -> delivered; pending/processing may be cancelled."
        ),
    )
    def patch(self, request, order_id):
        s = OrderStatusUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            order = OrderService(remote_for_request(request)).update_order_status(
                order_id, s.validated_data["status"]
            )
        except OrderNotFoundError:
            return _not_found(order_id)
        except InvalidOrderTransitionError as exc:
            return error_response(
                code="INVALID_TRANSITION",
                message=str(exc),
                http_status=status.HTTP_409_CONFLICT,
            )
        except ValueError as exc:
            return error_response(
                code="INVALID_STATUS",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


class OrderPaymentUpdateView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        tags=["Orders Admin"],
        request=PaymentStatusUpdateSerializer,
        responses={200: OrderSerializer, 404: OpenApiResponse(description="Not found")},
    )
    def patch(self, request, order_id):
        s = PaymentStatusUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            order = OrderService(remote_for_request(request)).update_payment_status(
                order_id, s.validated_data["is_paid"]
            )
        except OrderNotFoundError:
            return _not_found(order_id)

        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)
