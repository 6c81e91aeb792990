"""Aggregations behind the traveler and host dashboards."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from django.db.models import Count, Q, Sum  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking

PAID = Q(status=Booking.Status.CONFIRMED, payment_status=Booking.PaymentStatus.PAID)


def start_of_month(now: datetime | None = None) -> datetime:
    local = timezone.localtime(now or timezone.now())
    return local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def traveler_stats(user) -> dict:
    stats = Booking.objects.filter(user=user).aggregate(
        confirmed=Count("id", filter=PAID),
        pending=Count("id", filter=Q(status=Booking.Status.PENDING)),
        cancelled=Count("id", filter=Q(status=Booking.Status.CANCELLED)),
        total_spent=Sum("total_amount", filter=PAID),
    )
    stats["total_spent"] = stats["total_spent"] or Decimal("0")
    return stats


def host_stats(user, now: datetime | None = None) -> dict:
    """Stats over bookings of the host's listings; earnings count paid bookings only."""
    month_start = start_of_month(now)
    stats = Booking.objects.filter(listing__host=user).aggregate(
        total_bookings=Count("id", filter=PAID),
        pending_bookings=Count("id", filter=Q(status=Booking.Status.PENDING)),
        total_earnings=Sum("total_amount", filter=PAID),
        this_month_earnings=Sum("total_amount", filter=PAID & Q(paid_at__gte=month_start)),
    )
    stats["total_listings"] = user.listings.count()
    stats["total_earnings"] = stats["total_earnings"] or Decimal("0")
    stats["this_month_earnings"] = stats["this_month_earnings"] or Decimal("0")
    return stats
