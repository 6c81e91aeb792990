"""Integration tests for traveler and host dashboards."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.dashboard.services import start_of_month
from apps.favorites.models import Favorite
from apps.listings.models import Listing
from apps.users.models import User


class DashboardAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(
            email="host@example.com", password="HostPass123", name="Meera",
            role=User.RoleChoices.HOST,
        )
        self.traveler = User.objects.create_user(
            email="asha@example.com", password="TravelPass123", name="Asha",
        )
        self.listing = Listing.objects.create(
            host=self.host, title="Fort suite", description="", price=Decimal("100"),
            location="Jodhpur", country="India",
        )
        self.other_listing = Listing.objects.create(
            host=self.host, title="Garden room", description="", price=Decimal("60"),
            location="Jodhpur", country="India",
        )
        now = timezone.now()
        self._booking(date(2030, 1, 1), date(2030, 1, 3), "200",
                      Booking.Status.CONFIRMED, Booking.PaymentStatus.PAID, paid_at=now)
        self._booking(date(2030, 2, 1), date(2030, 2, 4), "300",
                      Booking.Status.CONFIRMED, Booking.PaymentStatus.PAID,
                      paid_at=start_of_month(now) - timedelta(days=3))
        self._booking(date(2030, 3, 1), date(2030, 3, 2), "100",
                      Booking.Status.PENDING, Booking.PaymentStatus.PENDING)
        self._booking(date(2030, 4, 1), date(2030, 4, 2), "100",
                      Booking.Status.CANCELLED, Booking.PaymentStatus.FAILED)
        Favorite.objects.create(user=self.traveler, listing=self.other_listing)

    def _booking(self, start, end, amount, booking_status, payment_status, paid_at=None):
        return Booking.objects.create(
            listing=self.listing, user=self.traveler, start_date=start, end_date=end,
            total_amount=Decimal(amount), status=booking_status,
            payment_status=payment_status, paid_at=paid_at,
        )

    def test_traveler_dashboard(self):
        self.client.force_authenticate(self.traveler)

        response = self.client.get(reverse("dashboard-traveler"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["bookings"]), 4)
        self.assertEqual(response.data["bookings"][0]["start_date"], "2030-04-01")
        self.assertEqual(
            [f["listing"]["title"] for f in response.data["favorites"]], ["Garden room"]
        )
        stats = response.data["stats"]
        self.assertEqual(stats["confirmed"], 2)
        self.assertEqual(stats["pending"], 1)
        self.assertEqual(stats["cancelled"], 1)
        self.assertEqual(stats["total_spent"], Decimal("500"))

    def test_host_dashboard(self):
        self.client.force_authenticate(self.host)

        response = self.client.get(reverse("dashboard-host"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["listings"]), 2)
        self.assertEqual(len(response.data["booking_requests"]), 3)
        self.assertNotIn("cancelled", [b["status"] for b in response.data["booking_requests"]])
        stats = response.data["stats"]
        self.assertEqual(stats["total_listings"], 2)
        self.assertEqual(stats["total_bookings"], 2)
        self.assertEqual(stats["pending_bookings"], 1)
        self.assertEqual(stats["total_earnings"], Decimal("500"))
        self.assertEqual(stats["this_month_earnings"], Decimal("200"))

    def test_host_dashboard_requires_host_role(self):
        self.client.force_authenticate(self.traveler)

        response = self.client.get(reverse("dashboard-host"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_host_without_bookings_has_zero_earnings(self):
        newcomer = User.objects.create_user(
            email="new@example.com", password="HostPass123", name="New",
            role=User.RoleChoices.HOST,
        )
        self.client.force_authenticate(newcomer)

        stats = self.client.get(reverse("dashboard-host")).data["stats"]

        self.assertEqual(stats["total_listings"], 0)
        self.assertEqual(stats["total_earnings"], Decimal("0"))
        self.assertEqual(stats["this_month_earnings"], Decimal("0"))

    def test_dashboard_requires_authentication(self):
        self.assertEqual(
            self.client.get(reverse("dashboard-traveler")).status_code,
            status.HTTP_401_UNAUTHORIZED,
        )

    def test_traveler_dashboard_rejects_hosts(self):
        self.client.force_authenticate(self.host)

        response = self.client.get(reverse("dashboard-traveler"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
