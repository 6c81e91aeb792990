"""Listing API views."""

from __future__ import annotations

import logging

from django.utils import timezone  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.services import booked_ranges, is_window_free
from shared.domain.value_objects import DateRange

from .filters import DEFAULT_SORT, SORT_ORDERINGS, ListingFilterSet
from .models import Listing
from .permissions import IsHostOwnerOrReadOnly
from .serializers import BookedRangeSerializer, ListingSerializer

logger = logging.getLogger(__name__)


class ListingViewSet(viewsets.ModelViewSet):
    """Catalogue of listings.

    Reading and searching is public. Hosts create listings; only the owning
    host updates or deletes them. Deleting a listing leaves its bookings and
    reviews in place.
    """

    queryset = (
        Listing.objects.select_related("host")
        .prefetch_related("amenities")
        .order_by(*SORT_ORDERINGS[DEFAULT_SORT])
    )
    serializer_class = ListingSerializer
    permission_classes = [IsHostOwnerOrReadOnly]
    filterset_class = ListingFilterSet

    def perform_create(self, serializer):  # type: ignore
        listing = serializer.save(host=self.request.user)
        logger.info(f"Listing {listing.pk} created by host {self.request.user.pk}")

    def perform_destroy(self, instance):  # type: ignore
        logger.info(f"Listing {instance.pk} deleted by host {self.request.user.pk}")
        instance.delete()

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny])
    def availability(self, request, pk=None):  # type: ignore
        """Booked date ranges from today on, optionally probing ``start``/``end``."""
        listing = self.get_object()
        today = timezone.localdate()
        data = {
            "listing": listing.pk,
            "booked": BookedRangeSerializer(
                [
                    {"start_date": window.start_date, "end_date": window.end_date}
                    for window in booked_ranges(listing.pk, today)
                ],
                many=True,
            ).data,
        }

        start = request.query_params.get("start")
        end = request.query_params.get("end")
        if start or end:
            window = DateRange.from_values(start, end)
            data["available"] = is_window_free(listing.pk, window.start_date, window.end_date)
        return Response(data)
