"""Serializers for reviews.

The creating user is inferred from the request in the view; the listing is
passed as a plain id so the service can answer 404 for unknown listings.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer

from .models import MAX_COMMENT_LENGTH, MIN_COMMENT_LENGTH, Review


class ReviewCreateSerializer(serializers.Serializer):
    listing = serializers.IntegerField(min_value=1)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    # CharField trims surrounding whitespace before the length checks
    comment = serializers.CharField(min_length=MIN_COMMENT_LENGTH, max_length=MAX_COMMENT_LENGTH)


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer for reviews."""

    user = UserShortSerializer(read_only=True)

    class Meta:
        model = Review
        fields = ["id", "listing", "user", "rating", "comment", "created_at"]
        read_only_fields = fields
