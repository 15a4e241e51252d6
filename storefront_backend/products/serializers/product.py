# products/serializers/product.py

"""
PRODUCT SERIALIZERS

Purpose:
- ProductSerializer: read shape for storefront + admin (from Product dataclass)
- ProductWriteSerializer: admin create contract
- ProductUpdateSerializer: admin partial update (only supplied fields are written)

Money is returned as a 2dp string.
"""

from rest_framework import serializers


class ProductSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    title = serializers.CharField()
    description = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    category = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    image_url = serializers.CharField()
    stock = serializers.IntegerField()
    author = serializers.CharField()
    author_handle = serializers.CharField()
    created_at = serializers.CharField(allow_null=True)


class ProductWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    category = serializers.CharField(required=False, allow_blank=True, default="")
    tags = serializers.ListField(
        child=serializers.CharField(allow_blank=True),
        required=False,
        default=list,
    )
    image_url = serializers.CharField(required=False, allow_blank=True, default="")
    stock = serializers.IntegerField(required=False, min_value=0, default=0)
    author = serializers.CharField(required=False, allow_blank=True, default="")
    author_handle = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_title(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Title is required")
        return value

    def validate_tags(self, value):
        # Admin form sends "a, b, c" as one string sometimes.
        tags = []
        for raw in value or []:
            tags.extend(t.strip() for t in str(raw).split(","))
        return [t for t in tags if t]


class ProductUpdateSerializer(ProductWriteSerializer):
    """
    Same rules; partial, so missing fields are neither required nor defaulted.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("partial", True)
        super().__init__(*args, **kwargs)


class ProductImageUploadSerializer(serializers.Serializer):
    image = serializers.FileField()
