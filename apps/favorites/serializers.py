"""Serializers for the favorites domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.listings.serializers import ListingSerializer

from .models import Favorite


class FavoriteSerializer(serializers.ModelSerializer):
    """Serializer for listing favorites."""

    listing = ListingSerializer(read_only=True)

    class Meta:
        model = Favorite
        fields = ['id', 'listing', 'created_at']


class FavoriteToggleSerializer(serializers.Serializer):
    listing = serializers.IntegerField(min_value=1)
