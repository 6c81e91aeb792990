"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.domain.value_objects import Money

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Booking request from a traveler."""

    listing = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] <= attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date must be after start date."})
        return attrs


class VerifyPaymentSerializer(serializers.Serializer):
    """Fields the gateway hands to the checkout page after payment."""

    order_id = serializers.CharField(max_length=100)
    payment_id = serializers.CharField(max_length=100)
    signature = serializers.CharField(max_length=128)


class PaymentFailedSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=100, required=False, default="payment_failed")


class BookingSerializer(serializers.ModelSerializer):
    listing_title = serializers.SerializerMethodField()
    nights = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "listing",
            "listing_title",
            "user",
            "start_date",
            "end_date",
            "nights",
            "status",
            "payment_status",
            "total_amount",
            "currency",
            "gateway_order_id",
            "gateway_payment_id",
            "paid_at",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_listing_title(self, obj: Booking) -> str | None:
        return obj.listing.title if obj.listing else None


def checkout_payload(booking: Booking, key_id: str) -> dict:
    """What the client needs to open the gateway checkout for ``booking``."""
    return {
        "order_id": booking.gateway_order_id,
        "amount": Money(booking.total_amount, booking.currency).to_minor_units(),
        "currency": booking.currency,
        "key_id": key_id,
    }
