"""Serializers for the listings domain."""

from __future__ import annotations

from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer

from .models import Amenity, Listing


class AmenityNamesField(serializers.ListField):
    """Amenities as a flat list of names; unknown names are created on write."""

    child = serializers.CharField(max_length=100)

    def to_representation(self, data):  # type: ignore
        return [amenity.name for amenity in data.all()]


class ListingSerializer(serializers.ModelSerializer):
    host = UserShortSerializer(read_only=True)
    amenities = AmenityNamesField(required=False)

    class Meta:
        model = Listing
        fields = [
            "id",
            "title",
            "description",
            "price",
            "location",
            "country",
            "image",
            "amenities",
            "host",
            "rating_average",
            "rating_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "host",
            "rating_average",
            "rating_count",
            "created_at",
            "updated_at",
        ]

    def validate_title(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title must not be blank.")
        return value

    @staticmethod
    def _amenity_objects(names: list[str]) -> list[Amenity]:
        amenities = []
        for name in dict.fromkeys(n.strip() for n in names if n.strip()):
            amenity, _ = Amenity.objects.get_or_create(name=name)
            amenities.append(amenity)
        return amenities

    @transaction.atomic
    def create(self, validated_data):  # type: ignore
        names = validated_data.pop("amenities", [])
        listing = Listing.objects.create(**validated_data)
        listing.amenities.set(self._amenity_objects(names))
        return listing

    @transaction.atomic
    def update(self, instance, validated_data):  # type: ignore
        names = validated_data.pop("amenities", None)
        listing = super().update(instance, validated_data)
        if names is not None:
            listing.amenities.set(self._amenity_objects(names))
        return listing


class BookedRangeSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
