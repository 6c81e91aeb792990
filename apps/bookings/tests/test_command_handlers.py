"""Booking use cases exercised against the database with a recording gateway."""

from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
)
from apps.bookings.models import Booking
from apps.bookings.repositories import DjangoBookingRepository, DjangoReservationCalendarRepository
from apps.bookings.services import booked_ranges, is_window_free
from apps.listings.models import Listing
from apps.payments.gateway import EmulatedGateway, GatewaySettings
from apps.users.models import User
from shared.domain.exceptions import Conflict, InvalidInput, NotFound
from shared.domain.value_objects import DateRange

pytestmark = pytest.mark.django_db


@pytest.fixture
def gateway():
    return EmulatedGateway(GatewaySettings(key_id="rzp_test_key", currency="INR"))


@pytest.fixture
def traveler():
    return User.objects.create_user(email="t@example.com", password="pass1234x", name="T")


@pytest.fixture
def listing():
    host = User.objects.create_user(
        email="h@example.com", password="pass1234x", name="H", role=User.RoleChoices.HOST
    )
    return Listing.objects.create(
        host=host, title="Loft", description="", price=Decimal("100"),
        location="Goa", country="India",
    )


def create(gateway, listing_id, user_id, start, end):
    handler = CreateBookingHandler(DjangoBookingRepository(), DjangoReservationCalendarRepository(), gateway)
    return handler.handle(CreateBookingCommand(listing_id, user_id, start, end))


def test_create_booking_charges_nights_in_minor_units(gateway, traveler, listing):
    booking = create(gateway, listing.pk, traveler.pk, "2030-01-10", "2030-01-12")

    stored = Booking.objects.get(pk=booking.id)
    assert stored.total_amount == Decimal("200")
    assert stored.currency == "INR"
    assert stored.gateway_order_id == booking.gateway_order_id
    assert len(gateway.orders) == 1
    order = gateway.orders[0]
    assert order["amount"] == 20000
    assert order["receipt"].startswith("booking_")
    assert order["notes"] == {"listing_id": listing.pk, "user_id": traveler.pk}


def test_conflict_does_not_contact_gateway(gateway, traveler, listing):
    create(gateway, listing.pk, traveler.pk, date(2030, 1, 10), date(2030, 1, 12))

    with pytest.raises(Conflict):
        create(gateway, listing.pk, traveler.pk, date(2030, 1, 12), date(2030, 1, 14))

    assert len(gateway.orders) == 1


def test_invalid_dates_are_rejected_before_listing_lookup(gateway, traveler):
    with pytest.raises(InvalidInput):
        create(gateway, 999999, traveler.pk, "2030-01-12", "2030-01-10")


def test_unknown_listing(gateway, traveler):
    with pytest.raises(NotFound):
        create(gateway, 999999, traveler.pk, "2030-01-10", "2030-01-12")


def test_availability_queries_follow_live_bookings(gateway, traveler, listing):
    booking = create(gateway, listing.pk, traveler.pk, "2030-01-10", "2030-01-12")

    assert not is_window_free(listing.pk, "2030-01-11", "2030-01-13")
    assert is_window_free(listing.pk, "2030-01-11", "2030-01-13", exclude_booking_id=booking.id)
    assert booked_ranges(listing.pk, date(2030, 1, 1)) == [DateRange(date(2030, 1, 10), date(2030, 1, 12))]
    assert booked_ranges(listing.pk, date(2030, 1, 13)) == []

    CancelBookingHandler(DjangoBookingRepository()).handle(
        CancelBookingCommand(booking_id=booking.id, requester_id=traveler.pk)
    )

    assert is_window_free(listing.pk, "2030-01-11", "2030-01-13")
    assert booked_ranges(listing.pk, date(2030, 1, 1)) == []
