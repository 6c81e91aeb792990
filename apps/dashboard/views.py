"""API views for dashboards."""

from __future__ import annotations

from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.serializers import BookingSerializer
from apps.favorites.models import Favorite
from apps.favorites.serializers import FavoriteSerializer
from apps.listings.serializers import ListingSerializer
from apps.users.permissions import IsTraveler
from shared.domain.exceptions import Forbidden

from .services import host_stats, traveler_stats


class TravelerDashboardView(APIView):
    """Own bookings (newest first), wishlist and booking stats."""

    permission_classes = [IsAuthenticated, IsTraveler]

    def get(self, request, format=None):  # type: ignore
        user = request.user
        bookings = (
            Booking.objects.filter(user=user)
            .select_related("listing")
            .order_by("-created_at", "-id")
        )
        favorites = (
            Favorite.objects.filter(user=user)
            .select_related("listing", "listing__host")
            .prefetch_related("listing__amenities")
        )
        return Response(
            {
                "bookings": BookingSerializer(bookings, many=True).data,
                "favorites": FavoriteSerializer(favorites, many=True).data,
                "stats": traveler_stats(user),
            }
        )


class HostDashboardView(APIView):
    """Host's listings, open booking requests on them, and earnings."""

    permission_classes = [IsAuthenticated]

    def get(self, request, format=None):  # type: ignore
        user = request.user
        if not user.is_host():
            raise Forbidden("Only hosts have a host dashboard.")

        listings = (
            user.listings.select_related("host")
            .prefetch_related("amenities")
            .order_by("-created_at", "-id")
        )
        requests = (
            Booking.objects.filter(listing__host=user)
            .exclude(status=Booking.Status.CANCELLED)
            .select_related("listing", "user")
            .order_by("-created_at", "-id")
        )
        return Response(
            {
                "listings": ListingSerializer(listings, many=True).data,
                "booking_requests": BookingSerializer(requests, many=True).data,
                "stats": host_stats(user),
            }
        )
