"""Unit tests for the booking aggregate and the reservation calendar (no database)."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from apps.bookings.domain.availability import Reservation, ReservationCalendar, find_conflicts
from apps.bookings.domain.entities import Booking, BookingStatus, PaymentStatus
from apps.bookings.domain.events import BookingCancelled, BookingConfirmed, PaymentFailed
from shared.domain.exceptions import Conflict, Forbidden, InvalidInput
from shared.domain.value_objects import DateRange, Money

NOW = datetime(2027, 1, 5, 12, 0)


def make_booking(**overrides) -> Booking:
    fields = dict(
        id=1,
        listing_id=10,
        user_id=7,
        dates=DateRange(date(2027, 1, 10), date(2027, 1, 12)),
        total_amount=Money(Decimal("200")),
        gateway_order_id="order_1",
    )
    fields.update(overrides)
    return Booking(**fields)


def make_calendar(*ranges) -> ReservationCalendar:
    return ReservationCalendar(
        id=10,
        listing_id=10,
        nightly_price=Money(Decimal("100")),
        reservations=[Reservation(booking_id=i, dates=DateRange(*r)) for i, r in enumerate(ranges, 1)],
    )


class TestDateRange:
    def test_nights_and_closed_overlap(self):
        stay = DateRange(date(2027, 1, 10), date(2027, 1, 12))

        assert stay.nights == 2
        assert stay.overlaps_with(DateRange(date(2027, 1, 11), date(2027, 1, 13)))
        assert stay.overlaps_with(DateRange(date(2027, 1, 12), date(2027, 1, 14)))
        assert stay.overlaps_with(DateRange(date(2027, 1, 8), date(2027, 1, 10)))
        assert not stay.overlaps_with(DateRange(date(2027, 1, 13), date(2027, 1, 15)))

    def test_end_must_follow_start(self):
        with pytest.raises(InvalidInput):
            DateRange(date(2027, 1, 12), date(2027, 1, 12))
        with pytest.raises(InvalidInput):
            DateRange.from_values("2027-01-12", "2027-01-10")

    def test_from_values_normalizes_input(self):
        stay = DateRange.from_values("2027-01-10", datetime(2027, 1, 12, 23, 30))

        assert stay == DateRange(date(2027, 1, 10), date(2027, 1, 12))
        assert str(stay) == "2027-01-10 - 2027-01-12"

    @pytest.mark.parametrize("bad", ["not-a-date", "", None, 20270110, "2027-13-01"])
    def test_malformed_dates_are_rejected(self, bad):
        with pytest.raises(InvalidInput):
            DateRange.from_values(bad, "2027-01-12")


class TestMoney:
    def test_minor_units(self):
        assert Money(Decimal("200")).to_minor_units() == 20000
        assert Money(Decimal("10.005")).to_minor_units() == 1001

    def test_negative_amount_is_rejected(self):
        with pytest.raises(InvalidInput):
            Money(Decimal("-1"))


class TestReservationCalendar:
    def test_quote_is_nights_times_price(self):
        calendar = make_calendar()

        total = calendar.quote(DateRange(date(2027, 1, 10), date(2027, 1, 12)))

        assert total == Money(Decimal("200"))

    def test_overlapping_window_conflicts(self):
        calendar = make_calendar((date(2027, 1, 10), date(2027, 1, 12)))

        assert not calendar.can_reserve(DateRange(date(2027, 1, 11), date(2027, 1, 13)))
        with pytest.raises(Conflict):
            calendar.ensure_can_reserve(DateRange(date(2027, 1, 11), date(2027, 1, 13)))

    def test_shared_boundary_day_conflicts(self):
        calendar = make_calendar((date(2027, 1, 10), date(2027, 1, 12)))

        assert not calendar.can_reserve(DateRange(date(2027, 1, 12), date(2027, 1, 14)))

    def test_disjoint_window_is_free(self):
        calendar = make_calendar((date(2027, 1, 10), date(2027, 1, 12)))

        assert calendar.can_reserve(DateRange(date(2027, 1, 13), date(2027, 1, 15)))

    def test_find_conflicts_lists_every_overlap(self):
        reservations = [
            Reservation(1, DateRange(date(2027, 1, 1), date(2027, 1, 3))),
            Reservation(2, DateRange(date(2027, 1, 5), date(2027, 1, 8))),
            Reservation(3, DateRange(date(2027, 1, 20), date(2027, 1, 22))),
        ]

        conflicts = find_conflicts(reservations, DateRange(date(2027, 1, 3), date(2027, 1, 6)))

        assert [r.booking_id for r in conflicts] == [1, 2]


class TestBookingLifecycle:
    def test_new_booking_is_pending_and_live(self):
        booking = make_booking()

        assert booking.status == BookingStatus.PENDING
        assert booking.payment_status == PaymentStatus.PENDING
        assert booking.is_live
        assert booking.nights == 2

    def test_confirm_payment(self):
        booking = make_booking()

        booking.confirm_payment("pay_1", "sig", NOW)

        assert (booking.status, booking.payment_status) == (BookingStatus.CONFIRMED, PaymentStatus.PAID)
        assert booking.gateway_payment_id == "pay_1"
        assert booking.paid_at == NOW
        assert [type(e) for e in booking.events] == [BookingConfirmed]

    def test_replayed_confirmation_is_a_no_op(self):
        booking = make_booking()
        booking.confirm_payment("pay_1", "sig", NOW)
        booking.clear_events()

        booking.confirm_payment("pay_1", "sig", datetime(2027, 1, 6))

        assert booking.paid_at == NOW
        assert booking.events == []

    def test_fail_payment(self):
        booking = make_booking()

        booking.fail_payment("signature_mismatch")

        assert (booking.status, booking.payment_status) == (BookingStatus.CANCELLED, PaymentStatus.FAILED)
        assert not booking.is_live
        assert isinstance(booking.events[0], PaymentFailed)

    def test_failing_a_failed_booking_is_a_no_op(self):
        booking = make_booking()
        booking.fail_payment("abandoned")
        booking.clear_events()

        booking.fail_payment("abandoned")

        assert booking.events == []

    def test_forged_callback_cannot_fail_a_paid_booking(self):
        booking = make_booking()
        booking.confirm_payment("pay_1", "sig", NOW)

        with pytest.raises(Conflict):
            booking.fail_payment("signature_mismatch")
        assert booking.is_paid

    def test_failed_booking_cannot_be_confirmed(self):
        booking = make_booking()
        booking.fail_payment("abandoned")

        with pytest.raises(Conflict):
            booking.confirm_payment("pay_1", "sig", NOW)

    def test_cancel_paid_booking_requests_refund(self):
        booking = make_booking()
        booking.confirm_payment("pay_1", "sig", NOW)
        booking.clear_events()

        booking.cancel(NOW)

        assert (booking.status, booking.payment_status) == (BookingStatus.CANCELLED, PaymentStatus.REFUNDED)
        assert booking.cancelled_at == NOW
        event = booking.events[0]
        assert isinstance(event, BookingCancelled)
        assert event.refund_requested
        assert event.previous_status == "confirmed"

    def test_cancel_unpaid_booking(self):
        booking = make_booking()

        booking.cancel(NOW)

        assert (booking.status, booking.payment_status) == (BookingStatus.CANCELLED, PaymentStatus.CANCELLED)
        assert not booking.events[0].refund_requested

    def test_cancel_keeps_failed_payment_and_is_repeatable(self):
        booking = make_booking()
        booking.fail_payment("abandoned")
        booking.clear_events()

        booking.cancel(NOW)
        booking.cancel(datetime(2027, 2, 1))

        assert booking.payment_status == PaymentStatus.FAILED
        assert booking.events == []

    def test_reissue_order_only_while_awaiting_payment(self):
        booking = make_booking()
        booking.reissue_order("order_2")
        assert booking.gateway_order_id == "order_2"

        booking.cancel(NOW)
        with pytest.raises(Conflict):
            booking.reissue_order("order_3")

    def test_ownership(self):
        booking = make_booking()

        booking.ensure_owned_by(7)
        with pytest.raises(Forbidden):
            booking.ensure_owned_by(8)

    def test_reissued_booking_remembers_earlier_orders(self):
        booking = make_booking()

        booking.reissue_order("order_2")

        assert booking.previous_order_ids == ["order_1"]
        assert booking.has_issued_order("order_1")
        assert booking.has_issued_order("order_2")
        assert not booking.has_issued_order("order_9")
        assert not booking.has_issued_order("")
