"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking
from .services import ContactDetails


class BookingCreateSerializer(serializers.Serializer):
    """Public booking request; contact fields are opaque strings."""

    full_name = serializers.CharField(max_length=255, trim_whitespace=True)
    phone = serializers.CharField(max_length=64, trim_whitespace=True)
    instagram = serializers.CharField(max_length=255, trim_whitespace=True)
    email = serializers.CharField(
        max_length=254, required=False, allow_blank=True, allow_null=True
    )
    date = serializers.DateField()
    slot = serializers.CharField(max_length=4)

    def contact(self) -> ContactDetails:
        data = self.validated_data
        return ContactDetails(
            full_name=data["full_name"],
            phone=data["phone"],
            instagram=data["instagram"],
            email=data.get("email") or None,
        )


class SlotOverrideSerializer(serializers.Serializer):
    date = serializers.DateField()
    slot = serializers.CharField(max_length=4)
    is_open = serializers.BooleanField()

    def validate(self, attrs):  # type: ignore
        # BooleanField also accepts "true" or 1; the admin API wants a JSON boolean.
        if not isinstance(self.initial_data.get("is_open"), bool):
            raise serializers.ValidationError({"is_open": ["Must be a boolean."]})
        return attrs


class BookingSerializer(serializers.ModelSerializer):
    """Admin view of a booking."""

    is_admin_block = serializers.BooleanField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "full_name",
            "phone",
            "instagram",
            "email",
            "date",
            "slot",
            "created_at",
            "is_admin_block",
        ]
        read_only_fields = fields
