"""
Booking repositories

Translate between the Django models and the booking domain aggregates.
"""

from __future__ import annotations

from decimal import Decimal

from apps.bookings.domain.availability import Reservation, ReservationCalendar
from apps.bookings.domain.entities import Booking, BookingStatus, PaymentStatus
from apps.bookings.models import Booking as BookingModel
from apps.bookings.services import lock_queryset_if_possible
from shared.domain.value_objects import DateRange, Money


class DjangoBookingRepository:
    def get_by_id(self, booking_id, *, lock: bool = False) -> Booking | None:
        queryset = BookingModel.objects.filter(pk=booking_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        model = queryset.first()
        return self._to_entity(model) if model else None

    def save(self, booking: Booking) -> Booking:
        fields = {
            "listing_id": booking.listing_id,
            "user_id": booking.user_id,
            "start_date": booking.dates.start_date,
            "end_date": booking.dates.end_date,
            "status": booking.status.value,
            "payment_status": booking.payment_status.value,
            "total_amount": booking.total_amount.amount,
            "currency": booking.total_amount.currency,
            "gateway_order_id": booking.gateway_order_id,
            "gateway_payment_id": booking.gateway_payment_id,
            "gateway_signature": booking.gateway_signature,
            "previous_order_ids": list(booking.previous_order_ids),
            "paid_at": booking.paid_at,
            "cancelled_at": booking.cancelled_at,
        }
        if booking.id is None:
            model = BookingModel.objects.create(**fields)
            booking.id = model.pk
        else:
            model = BookingModel.objects.get(pk=booking.id)
            for name, value in fields.items():
                setattr(model, name, value)
            model.save(update_fields=[*fields, "updated_at"])
        return booking

    @staticmethod
    def _to_entity(model: BookingModel) -> Booking:
        return Booking(
            id=model.pk,
            listing_id=model.listing_id,
            user_id=model.user_id,
            dates=DateRange(model.start_date, model.end_date),
            total_amount=Money(Decimal(model.total_amount), model.currency),
            status=BookingStatus(model.status),
            payment_status=PaymentStatus(model.payment_status),
            gateway_order_id=model.gateway_order_id,
            gateway_payment_id=model.gateway_payment_id,
            gateway_signature=model.gateway_signature,
            previous_order_ids=list(model.previous_order_ids or []),
            paid_at=model.paid_at,
            cancelled_at=model.cancelled_at,
        )


class DjangoReservationCalendarRepository:
    def get_for_listing(
        self,
        listing_id,
        currency: str,
        *,
        window: DateRange | None = None,
        lock: bool = False,
    ) -> ReservationCalendar | None:
        """
        Load the live reservations of a listing.

        With ``lock=True`` inside a transaction the listing row is locked
        (SELECT FOR UPDATE) first, so concurrent bookings of the same listing
        are checked and inserted one at a time. ``window`` narrows the
        loaded reservations to those overlapping it.
        """
        from apps.listings.models import Listing

        listing_qs = Listing.objects.filter(pk=listing_id)
        if lock:
            listing_qs = lock_queryset_if_possible(listing_qs)
        price = listing_qs.values_list("price", flat=True).first()
        if price is None:
            return None

        bookings_qs = BookingModel.objects.for_listing(listing_id).live()
        if window is not None:
            bookings_qs = bookings_qs.overlapping(window.start_date, window.end_date)

        reservations = [
            Reservation(booking_id=pk, dates=DateRange(start, end))
            for pk, start, end in bookings_qs.values_list("pk", "start_date", "end_date")
        ]
        return ReservationCalendar(
            id=listing_id,
            listing_id=listing_id,
            nightly_price=Money(Decimal(price), currency),
            reservations=reservations,
        )
