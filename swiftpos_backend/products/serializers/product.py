# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Canonical Product shape for both admin input (upsert) and stored records.
- Money is Decimal (2dp, non-negative); stock is an integer >= 0.
- Optional text fields normalize to "" (legacy records may carry null).
"""

from decimal import Decimal

from rest_framework import serializers

from products.models import Product
from storage.models import new_record_id


class ProductSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    name = serializers.CharField(max_length=255)
    sku = serializers.CharField(allow_blank=True, allow_null=True, default="", max_length=64)
    barcode = serializers.CharField(allow_blank=True, allow_null=True, default="", max_length=64)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    stock = serializers.IntegerField(min_value=0)
    category = serializers.CharField(allow_blank=True, allow_null=True, default="", max_length=128)

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def create(self, validated_data):
        return Product(
            id=validated_data.get("id") or new_record_id(),
            name=validated_data["name"],
            sku=validated_data.get("sku") or "",
            barcode=validated_data.get("barcode") or "",
            price=validated_data["price"],
            stock=int(validated_data["stock"]),
            category=validated_data.get("category") or "",
        )
