"""Listing domain models for Homio.

A listing is a place a host rents out by the night. Its rating fields are a
denormalized aggregate of the reviews and are only ever written by
``apps.reviews.services.recompute_listing_rating``.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

DEFAULT_LISTING_IMAGE = (
    "https://images.unsplash.com/photo-1625505826533-5c80aca7d157"
    "?ixlib=rb-4.0.3&auto=format&fit=crop&w=1000&q=60"
)


class Amenity(models.Model):
    """Amenity that can be attached to listings (Wi-Fi, kitchen, pool...)."""

    name = models.CharField(max_length=100, unique=True)

    class Meta:
        verbose_name = _("Amenity")
        verbose_name_plural = _("Amenities")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Listing(models.Model):
    """Place published by a host and rented out per night."""

    host = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="listings",
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Price per night."),
    )
    location = models.CharField(max_length=255)
    country = models.CharField(max_length=100)
    image = models.URLField(max_length=500, blank=True)
    amenities = models.ManyToManyField(Amenity, blank=True, related_name="listings")
    rating_average = models.FloatField(default=0)
    rating_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Listing")
        verbose_name_plural = _("Listings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="listing_price_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["host", "-created_at"], name="listing_host_created_idx"),
            models.Index(fields=["price"], name="listing_price_idx"),
            models.Index(fields=["-rating_average"], name="listing_rating_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    def save(self, *args, **kwargs):  # type: ignore
        if not self.image:
            self.image = DEFAULT_LISTING_IMAGE
        super().save(*args, **kwargs)
