# sales/serializers/order.py

"""
ORDER SERIALIZER

Stored shape of a ledger entry. Used to encode new orders on append and to
decode the ledger for reporting. Items are nested snapshots.
"""

from rest_framework import serializers

from sales.models import Order, OrderItem

from .order_item import OrderItemSerializer


class OrderSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    created_at = serializers.DateTimeField()
    items = OrderItemSerializer(many=True)
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    tax = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    cashier_id = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    cashier_name = serializers.CharField(required=False, allow_null=True, allow_blank=True, default="")

    def create(self, validated_data):
        items = tuple(OrderItem(**dict(item)) for item in validated_data["items"])
        return Order(
            id=validated_data["id"],
            created_at=validated_data["created_at"],
            items=items,
            subtotal=validated_data["subtotal"],
            tax=validated_data["tax"],
            total=validated_data["total"],
            cashier_id=validated_data.get("cashier_id") or None,
            cashier_name=validated_data.get("cashier_name") or "",
        )
