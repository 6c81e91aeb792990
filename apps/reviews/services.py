"""Review use cases and the listing rating aggregate."""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Avg, Count  # type: ignore

from shared.domain.exceptions import Conflict, Forbidden, NotFound

logger = logging.getLogger(__name__)


def recompute_listing_rating(listing_id) -> tuple[float, int]:
    """Recompute and store the mean rating and review count of a listing.

    A listing without reviews gets ``(0, 0)``. Running it again without new
    reviews writes the same values.
    """
    from apps.listings.models import Listing

    from .models import Review

    aggregate = Review.objects.filter(listing_id=listing_id).aggregate(
        average=Avg("rating"), count=Count("id")
    )
    average = float(aggregate["average"] or 0)
    count = aggregate["count"] or 0

    Listing.objects.filter(pk=listing_id).update(rating_average=average, rating_count=count)
    logger.info(f"Listing {listing_id} rating recomputed: {average:.2f} over {count} review(s)")
    return average, count


def create_review(*, listing_id, user, rating: int, comment: str):
    """Create the user's review of a listing and refresh its rating.

    Raises NotFound when the listing does not exist, Forbidden without a
    confirmed booking of it, and Conflict when the user already reviewed it.
    """
    from apps.bookings.models import Booking
    from apps.listings.models import Listing

    from .models import Review

    if not Listing.objects.filter(pk=listing_id).exists():
        raise NotFound(f"Listing {listing_id} not found")

    has_stayed = Booking.objects.filter(
        listing_id=listing_id,
        user=user,
        status=Booking.Status.CONFIRMED,
    ).exists()
    if not has_stayed:
        raise Forbidden("You can only review places you have booked.")

    try:
        with transaction.atomic():
            review = Review.objects.create(
                listing_id=listing_id,
                user=user,
                rating=rating,
                comment=comment,
            )
    except IntegrityError:
        raise Conflict("You already reviewed this listing.")

    recompute_listing_rating(listing_id)
    logger.info(f"Review {review.pk} by user {user.pk} for listing {listing_id}")
    return review
