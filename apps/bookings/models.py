"""Booking persistence models for Homio."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class BookingQuerySet(models.QuerySet):
    def live(self):
        """Bookings that hold their dates: pending/confirmed with pending/paid payment."""
        return self.filter(
            status__in=Booking.LIVE_STATUSES,
            payment_status__in=Booking.LIVE_PAYMENT_STATUSES,
        )

    def overlapping(self, start_date, end_date):
        """Closed-interval overlap with [start_date, end_date]."""
        return self.filter(Q(start_date__lte=end_date) & Q(end_date__gte=start_date))

    def for_listing(self, listing_id):
        return self.filter(listing_id=listing_id)


class Booking(models.Model):
    """Reservation of a listing by a traveler."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        PAID = "paid", _("Paid")
        FAILED = "failed", _("Failed")
        REFUNDED = "refunded", _("Refunded")
        CANCELLED = "cancelled", _("Cancelled")

    LIVE_STATUSES = (Status.PENDING, Status.CONFIRMED)
    LIVE_PAYMENT_STATUSES = (PaymentStatus.PENDING, PaymentStatus.PAID)

    listing = models.ForeignKey(
        "listings.Listing",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_status = models.CharField(
        max_length=16,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Nights x nightly price at booking time."),
    )
    currency = models.CharField(max_length=3, default="INR")
    gateway_order_id = models.CharField(max_length=100, blank=True)
    gateway_payment_id = models.CharField(max_length=100, blank=True)
    gateway_signature = models.CharField(max_length=128, blank=True)
    previous_order_ids = models.JSONField(default=list, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["listing", "start_date", "end_date"], name="booking_listing_dates_idx"),
            models.Index(fields=["gateway_order_id"], name="booking_gateway_order_idx"),
            models.Index(fields=["user", "-created_at"], name="booking_user_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for listing {self.listing_id} ({self.status}/{self.payment_status})"

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def is_live(self) -> bool:
        return self.status in self.LIVE_STATUSES and self.payment_status in self.LIVE_PAYMENT_STATUSES
