# users/serializers/cashier.py

from rest_framework import serializers

from storage.models import new_record_id
from users.models import Cashier


class CashierSerializer(serializers.Serializer):
    """
    Stored shape of a cashier record.

    Username and password are kept byte-exact (no whitespace trimming):
    uniqueness and credential comparison are case- and space-sensitive.
    """

    id = serializers.CharField(required=False, allow_blank=True, max_length=64)
    username = serializers.CharField(max_length=150, trim_whitespace=False)
    password = serializers.CharField(trim_whitespace=False)
    name = serializers.CharField(max_length=255)
    created_at = serializers.DateTimeField()

    def create(self, validated_data):
        return Cashier(
            id=validated_data.get("id") or new_record_id(),
            username=validated_data["username"],
            password=validated_data["password"],
            name=validated_data["name"],
            created_at=validated_data["created_at"],
        )
