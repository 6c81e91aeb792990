"""Availability queries for booking workflows."""

from __future__ import annotations

from datetime import date

from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.domain.value_objects import DateRange


def lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _overlapping_live_bookings(listing_id, start_date: date, end_date: date, exclude_booking_id=None):
    from .models import Booking  # Local import to prevent circular dependency

    bookings_qs = Booking.objects.for_listing(listing_id).live().overlapping(start_date, end_date)
    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)
    return bookings_qs


def is_window_free(listing_id, start, end, *, exclude_booking_id=None) -> bool:
    """True when no live booking of the listing overlaps [start, end].

    ``start``/``end`` may be dates, datetimes or ISO strings; malformed input
    or ``end <= start`` raises InvalidInput.
    """
    window = DateRange.from_values(start, end)
    return not _overlapping_live_bookings(
        listing_id, window.start_date, window.end_date, exclude_booking_id
    ).exists()


def booked_ranges(listing_id, today: date) -> list[DateRange]:
    """Live booked ranges that end on or after ``today``, earliest first."""
    from .models import Booking

    rows = (
        Booking.objects.for_listing(listing_id)
        .live()
        .filter(end_date__gte=today)
        .order_by("start_date", "end_date")
        .values_list("start_date", "end_date")
    )
    return [DateRange(start, end) for start, end in rows]
