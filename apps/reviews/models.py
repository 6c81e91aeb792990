"""Models for the review domain.

Defines the ``Review`` entity: a rating and comment left by a traveler who
holds a confirmed booking for the listing. One user can leave at most one
review per listing. Creating a review refreshes the listing's rating
aggregate (see ``services.recompute_listing_rating``).
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinLengthValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

MIN_COMMENT_LENGTH = 5
MAX_COMMENT_LENGTH = 500


class Review(models.Model):
    """Feedback left by a traveler for a listing."""

    listing = models.ForeignKey(
        "listings.Listing",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviews",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews"
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_("Rating from 1 to 5"),
    )
    comment = models.TextField(
        max_length=MAX_COMMENT_LENGTH,
        validators=[MinLengthValidator(MIN_COMMENT_LENGTH)],
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["listing", "user"], name="review_unique_listing_user"),
            models.CheckConstraint(
                condition=models.Q(rating__gte=1) & models.Q(rating__lte=5),
                name="review_rating_range",
            ),
        ]
        indexes = [
            models.Index(fields=["listing", "-created_at"], name="review_listing_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Review by {self.user_id} for listing {self.listing_id} (Rating: {self.rating})"
