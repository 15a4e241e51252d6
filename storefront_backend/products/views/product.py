# products/views/product.py

"""
PRODUCT VIEWS

Storefront (AllowAny):
- GET /api/products/                 all products, newest first
- GET /api/products/?category=<name> category filter
- GET /api/products/?q=<term>        search (title / description / category)
- GET /api/products/<id>/

Admin (IsAdmin):
- POST   /api/products/
- PATCH  /api/products/<id>/
- DELETE /api/products/<id>/
- POST   /api/products/<id>/image/   multipart upload, sets image_url
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from backend.exception_handler import error_response
from products.serializers import (
    ProductImageUploadSerializer,
    ProductSerializer,
    ProductUpdateSerializer,
    ProductWriteSerializer,
)
from products.services import ProductNotFoundError, ProductService
from remote.middleware import remote_for_request
from users.permissions import IsAdmin


class CatalogThrottle(AnonRateThrottle):
    scope = "catalog"


def _not_found(product_id: str):
    return error_response(
        code="PRODUCT_NOT_FOUND",
        message=f"Product {product_id} not found",
        http_status=status.HTTP_404_NOT_FOUND,
    )


class AdminWritesMixin:
    """
    Safe methods are public; everything else requires the admin role.
    """

    def get_permissions(self):
        if self.request.method in ("GET", "HEAD", "OPTIONS"):
            return [AllowAny()]
        return [IsAuthenticated(), IsAdmin()]


class ProductListView(AdminWritesMixin, APIView):
    parser_classes = [JSONParser]
    throttle_classes = [CatalogThrottle]
    serializer_class = ProductSerializer

    @extend_schema(
        tags=["Catalog"],
        parameters=[
            OpenApiParameter(name="category", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="q", type=str, location=OpenApiParameter.QUERY, required=False),
        ],
        responses={200: ProductSerializer(many=True)},
        description="Product catalog (AllowAny). Optional category filter and search term.",
    )
    def get(self, request):
        service = ProductService(remote_for_request(request))

        category = (request.query_params.get("category") or "").strip()
        term = (request.query_params.get("q") or "").strip()

        if term:
            products = service.search_products(term)
            if category:
                products = [p for p in products if p.category == category]
        elif category:
            products = service.get_products_by_category(category)
        else:
            products = service.get_all_products()

        return Response(ProductSerializer(products, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Catalog Admin"],
        request=ProductWriteSerializer,
        responses={201: ProductSerializer, 403: OpenApiResponse(description="Admin only")},
        description="Create a product (admin).",
    )
    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = ProductService(remote_for_request(request))
        product_id = service.add_product(serializer.validated_data)
        product = service.get_product_by_id(product_id)

        payload = ProductSerializer(product).data if product else {"id": product_id}
        return Response(payload, status=status.HTTP_201_CREATED)


class ProductDetailView(AdminWritesMixin, APIView):
    parser_classes = [JSONParser]
    serializer_class = ProductSerializer

    @extend_schema(
        tags=["Catalog"],
        responses={200: ProductSerializer, 404: OpenApiResponse(description="Not found")},
    )
    def get(self, request, product_id):
        product = ProductService(remote_for_request(request)).get_product_by_id(product_id)
        if product is None:
            return _not_found(product_id)
        return Response(ProductSerializer(product).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Catalog Admin"],
        request=ProductUpdateSerializer,
        responses={200: ProductSerializer, 404: OpenApiResponse(description="Not found")},
        description="Partially update a product (admin). Only supplied fields change.",
    )
    def patch(self, request, product_id):
        serializer = ProductUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            product = ProductService(remote_for_request(request)).update_product(
                product_id, serializer.validated_data
            )
        except ProductNotFoundError:
            return _not_found(product_id)

        return Response(ProductSerializer(product).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Catalog Admin"],
        responses={204: None, 404: OpenApiResponse(description="Not found")},
        description="Delete a product and its stored image (admin).",
    )
    def delete(self, request, product_id):
        try:
            ProductService(remote_for_request(request)).delete_product(product_id)
        except ProductNotFoundError:
            return _not_found(product_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProductImageUploadView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    parser_classes = [MultiPartParser, FormParser]
    serializer_class = ProductImageUploadSerializer

    @extend_schema(
        tags=["Catalog Admin"],
        request={"multipart/form-data": ProductImageUploadSerializer},
        responses={200: ProductSerializer, 404: OpenApiResponse(description="Not found")},
        description="Upload a product image to object storage and attach it (admin).",
    )
    def post(self, request, product_id):
        serializer = ProductImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = ProductService(remote_for_request(request))
        existing = service.get_product_by_id(product_id)
        if existing is None:
            return _not_found(product_id)

        image_url = service.upload_product_image(serializer.validated_data["image"], product_id)
        product = service.update_product(product_id, {"image_url": image_url})

        if existing.image_url and existing.image_url != image_url:
            service.delete_product_image(existing.image_url)

        return Response(ProductSerializer(product).data, status=status.HTTP_200_OK)
