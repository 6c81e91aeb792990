"""Integration tests for listing endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.listings.models import DEFAULT_LISTING_IMAGE, Amenity, Listing
from apps.users.models import User


class ListingAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(
            email="host@example.com",
            password="HostPass123",
            name="Meera",
            role=User.RoleChoices.HOST,
        )
        self.other_host = User.objects.create_user(
            email="host2@example.com",
            password="HostPass123",
            name="Kabir",
            role=User.RoleChoices.HOST,
        )
        self.traveler = User.objects.create_user(
            email="traveler@example.com",
            password="TravelPass123",
            name="Asha",
        )
        self.list_url = reverse("listing-list")

    def _listing(self, **overrides) -> Listing:
        fields = {
            "host": self.host,
            "title": "Cottage",
            "description": "Quiet",
            "price": Decimal("100.00"),
            "location": "Udaipur",
            "country": "India",
        }
        fields.update(overrides)
        return Listing.objects.create(**fields)

    def _ids(self, response) -> list[int]:
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return [item["id"] for item in response.data]

    def test_host_creates_listing_with_amenities_and_default_image(self):
        self.client.force_authenticate(self.host)

        response = self.client.post(
            self.list_url,
            {
                "title": "  Desert camp ",
                "description": "Tents under the stars",
                "price": "80.00",
                "location": "Jaisalmer",
                "country": "India",
                "amenities": ["Wifi", "Breakfast", "Wifi"],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["title"], "Desert camp")
        self.assertEqual(response.data["host"]["id"], self.host.pk)
        self.assertEqual(response.data["image"], DEFAULT_LISTING_IMAGE)
        self.assertEqual(sorted(response.data["amenities"]), ["Breakfast", "Wifi"])
        self.assertEqual(response.data["rating_count"], 0)
        self.assertEqual(Amenity.objects.count(), 2)

    def test_traveler_cannot_create_listing(self):
        self.client.force_authenticate(self.traveler)

        response = self.client.post(
            self.list_url,
            {"title": "Flat", "price": "10", "location": "Pune", "country": "India"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_negative_price_is_rejected(self):
        self.client.force_authenticate(self.host)

        response = self.client.post(
            self.list_url,
            {"title": "Flat", "price": "-1", "location": "Pune", "country": "India"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_only_owner_updates_or_deletes(self):
        listing = self._listing()
        detail_url = reverse("listing-detail", args=[listing.pk])

        self.client.force_authenticate(self.other_host)
        self.assertEqual(
            self.client.patch(detail_url, {"price": "1"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(self.client.delete(detail_url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.host)
        response = self.client.patch(detail_url, {"price": "120.00", "amenities": ["Pool"]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["price"]), Decimal("120"))
        self.assertEqual(response.data["amenities"], ["Pool"])

        self.assertEqual(self.client.delete(detail_url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Listing.objects.filter(pk=listing.pk).exists())

    def test_deleting_listing_keeps_bookings(self):
        listing = self._listing()
        booking = Booking.objects.create(
            listing=listing,
            user=self.traveler,
            start_date=timezone.localdate() + timedelta(days=3),
            end_date=timezone.localdate() + timedelta(days=5),
            total_amount=Decimal("200"),
        )
        self.client.force_authenticate(self.host)

        self.client.delete(reverse("listing-detail", args=[listing.pk]))

        booking.refresh_from_db()
        self.assertIsNone(booking.listing_id)

    def test_public_list_and_location_search(self):
        india = self._listing(title="Palace", location="Jaipur", country="India")
        self._listing(title="Cabin", location="Oslo", country="Norway")
        america = self._listing(title="Loft", location="Austin", country="United States of America")

        self.assertEqual(len(self._ids(self.client.get(self.list_url))), 3)
        self.assertEqual(self._ids(self.client.get(self.list_url, {"location": "ndia"})), [india.pk])
        self.assertEqual(self._ids(self.client.get(self.list_url, {"location": "amrica"})), [america.pk])

    def test_price_rating_and_amenity_filters(self):
        wifi = Amenity.objects.create(name="Wifi")
        pool = Amenity.objects.create(name="Pool")
        cheap = self._listing(title="Hostel", price=Decimal("40"), rating_average=3.5, rating_count=2)
        mid = self._listing(title="Inn", price=Decimal("90"), rating_average=4.6, rating_count=5)
        dear = self._listing(title="Villa", price=Decimal("300"), rating_average=4.9, rating_count=9)
        mid.amenities.set([wifi, pool])
        dear.amenities.set([wifi])

        ids = self._ids(self.client.get(self.list_url, {"min_price": "50", "max_price": "100"}))
        self.assertEqual(ids, [mid.pk])

        ids = self._ids(self.client.get(self.list_url, {"min_rating": "4.5", "sort": "price_asc"}))
        self.assertEqual(ids, [mid.pk, dear.pk])

        ids = self._ids(self.client.get(self.list_url, {"amenities": "Wifi,Pool"}))
        self.assertEqual(ids, [mid.pk])

        ids = self._ids(self.client.get(self.list_url, {"min_price": "oops", "sort": "rating_desc"}))
        self.assertEqual(ids, [dear.pk, mid.pk, cheap.pk])

    def test_sort_by_price_desc(self):
        low = self._listing(price=Decimal("10"))
        high = self._listing(price=Decimal("500"))

        ids = self._ids(self.client.get(self.list_url, {"sort": "price_desc"}))

        self.assertEqual(ids, [high.pk, low.pk])

    def test_availability_lists_live_future_bookings(self):
        listing = self._listing()
        today = timezone.localdate()
        Booking.objects.create(
            listing=listing, user=self.traveler,
            start_date=today + timedelta(days=10), end_date=today + timedelta(days=12),
            total_amount=Decimal("200"),
        )
        Booking.objects.create(
            listing=listing, user=self.traveler,
            start_date=today + timedelta(days=20), end_date=today + timedelta(days=22),
            total_amount=Decimal("200"),
            status=Booking.Status.CANCELLED, payment_status=Booking.PaymentStatus.CANCELLED,
        )
        Booking.objects.create(
            listing=listing, user=self.traveler,
            start_date=today - timedelta(days=10), end_date=today - timedelta(days=8),
            total_amount=Decimal("200"),
            status=Booking.Status.CONFIRMED, payment_status=Booking.PaymentStatus.PAID,
        )
        url = reverse("listing-availability", args=[listing.pk])

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data["booked"],
            [{
                "start_date": (today + timedelta(days=10)).isoformat(),
                "end_date": (today + timedelta(days=12)).isoformat(),
            }],
        )
        self.assertNotIn("available", response.data)

        window = {
            "start": (today + timedelta(days=12)).isoformat(),
            "end": (today + timedelta(days=14)).isoformat(),
        }
        self.assertFalse(self.client.get(url, window).data["available"])
        window["start"] = (today + timedelta(days=13)).isoformat()
        self.assertTrue(self.client.get(url, window).data["available"])

        self.assertEqual(
            self.client.get(url, {"start": "bogus", "end": window["end"]}).status_code,
            status.HTTP_400_BAD_REQUEST,
        )
