"""Admin registrations for the listings domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Amenity, Listing


@admin.register(Amenity)
class AmenityAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ("title", "location", "country", "price", "host", "rating_average", "rating_count")
    list_filter = ("country",)
    search_fields = ("title", "location", "country", "host__email")
    readonly_fields = ("rating_average", "rating_count", "created_at", "updated_at")
    filter_horizontal = ("amenities",)
