# users/serializers/session.py

from rest_framework import serializers

from permissions.roles import ROLE_CHOICES
from users.models import Session


class SessionSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=ROLE_CHOICES)
    username = serializers.CharField(max_length=150, trim_whitespace=False)
    cashier_id = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    name = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    logged_at = serializers.DateTimeField()

    def create(self, validated_data):
        return Session(
            role=validated_data["role"],
            username=validated_data["username"],
            logged_at=validated_data["logged_at"],
            cashier_id=validated_data.get("cashier_id") or None,
            name=validated_data.get("name") or None,
        )
