"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "listing",
        "user",
        "status",
        "payment_status",
        "start_date",
        "end_date",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "start_date")
    search_fields = ("listing__title", "user__email", "gateway_order_id", "gateway_payment_id")
    readonly_fields = (
        "total_amount",
        "currency",
        "gateway_order_id",
        "gateway_payment_id",
        "gateway_signature",
        "paid_at",
        "cancelled_at",
        "created_at",
        "updated_at",
    )
