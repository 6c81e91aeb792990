"""API views for the wishlist."""

from __future__ import annotations

import logging

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.listings.models import Listing
from shared.domain.exceptions import NotFound

from .models import Favorite
from .serializers import FavoriteSerializer, FavoriteToggleSerializer

logger = logging.getLogger(__name__)


class FavoriteViewSet(
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Wishlist of the authenticated user.

    Endpoints:
    - GET /api/v1/favorites/ - saved listings, newest first
    - DELETE /api/v1/favorites/{id}/ - remove one entry
    - POST /api/v1/favorites/toggle/ - add or remove a listing
    """

    queryset = Favorite.objects.select_related('listing', 'listing__host').prefetch_related(
        'listing__amenities'
    )
    serializer_class = FavoriteSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        return super().get_queryset().filter(user=self.request.user)

    def get_serializer_class(self):  # type: ignore
        if self.action == 'toggle':
            return FavoriteToggleSerializer
        return FavoriteSerializer

    @action(detail=False, methods=['post'])
    def toggle(self, request):  # type: ignore
        """
        POST /api/v1/favorites/toggle/
        Body: {"listing": 123}

        Returns:
            {"listing": 123, "in_wishlist": true | false}
        """
        serializer = FavoriteToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        listing_id = serializer.validated_data['listing']

        if not Listing.objects.filter(pk=listing_id).exists():
            raise NotFound(f"Listing {listing_id} not found")

        deleted, _ = Favorite.objects.filter(user=request.user, listing_id=listing_id).delete()
        if deleted:
            logger.info(f"User {request.user.pk} removed listing {listing_id} from wishlist")
            return Response({"listing": listing_id, "in_wishlist": False}, status=status.HTTP_200_OK)

        Favorite.objects.get_or_create(user=request.user, listing_id=listing_id)
        logger.info(f"User {request.user.pk} added listing {listing_id} to wishlist")
        return Response({"listing": listing_id, "in_wishlist": True}, status=status.HTTP_201_CREATED)
