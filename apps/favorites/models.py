"""Model definition for favorites.

The ``Favorite`` model is a listing a traveler saved to their wishlist.
Duplicate favorites are prevented via a unique constraint.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore


class Favorite(models.Model):
    """A user's saved listing."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='favorites'
    )
    listing = models.ForeignKey(
        'listings.Listing', on_delete=models.CASCADE, related_name='favorited_by'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(fields=['user', 'listing'], name='favorite_unique_user_listing'),
        ]

    def __str__(self) -> str:
        return f"Favorite listing {self.listing_id} by user {self.user_id}"
