from decimal import Decimal

from rest_framework import serializers


class OrderItemSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255, allow_blank=True)
    qty = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
