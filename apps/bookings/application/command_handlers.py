"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Create a pending booking and its gateway order
- ResumePaymentCommand: Issue a fresh gateway order for an unpaid booking
- CancelBookingCommand: Owner cancels a booking
- FailPaymentCommand: Payment failed or was abandoned on the client
- VerifyPaymentCommand: Check a gateway callback signature and finalize
"""

from dataclasses import dataclass
from datetime import date, datetime
import logging
import time

from django.utils import timezone

from apps.bookings.domain.entities import Booking
from apps.bookings.domain.events import BookingCreated
from apps.payments.signatures import verify_signature
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import NotFound
from shared.domain.value_objects import DateRange

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    Dates may be ``date``/``datetime`` objects or ISO strings.
    """
    listing_id: int
    user_id: int
    start_date: date | datetime | str
    end_date: date | datetime | str


@dataclass
class ResumePaymentCommand:
    booking_id: int
    requester_id: int


@dataclass
class CancelBookingCommand:
    booking_id: int
    requester_id: int


@dataclass
class FailPaymentCommand:
    """Client reports that the payer failed or abandoned the checkout"""
    booking_id: int
    requester_id: int
    reason: str = 'payment_failed'


@dataclass
class VerifyPaymentCommand:
    """Gateway callback relayed by the client after checkout"""
    booking_id: int
    order_id: str
    payment_id: str
    signature: str
    requester_id: int


@dataclass
class PaymentVerification:
    """Outcome of a verification: a forged signature is a result, not an error"""
    booking: Booking
    verified: bool


def _receipt() -> str:
    return f"booking_{int(time.time() * 1000)}"


def _load_owned_booking(booking_repo, booking_id, requester_id) -> Booking:
    booking = booking_repo.get_by_id(booking_id, lock=True)
    if not booking:
        raise NotFound(f"Booking {booking_id} not found")
    booking.ensure_owned_by(requester_id)
    return booking


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Strategy:
    1. Normalize the requested dates (InvalidInput on bad input)
    2. Start database transaction (atomic)
    3. Load the listing's ReservationCalendar with the listing row locked
    4. Check overlap against live bookings (Conflict)
    5. Price the stay and create the gateway order (UpstreamFailure rolls back)
    6. Save the pending booking, publish BookingCreated after commit
    """

    def __init__(self, booking_repo, calendar_repo, gateway):
        self.booking_repo = booking_repo
        self.calendar_repo = calendar_repo
        self.gateway = gateway

    def handle(self, command: CreateBookingCommand) -> Booking:
        dates = DateRange.from_values(command.start_date, command.end_date)
        currency = self.gateway.config.currency

        logger.info(
            f"Creating booking for listing {command.listing_id}, "
            f"user {command.user_id}, dates {dates}"
        )

        with DjangoUnitOfWork() as uow:
            calendar = self.calendar_repo.get_for_listing(
                command.listing_id,
                currency,
                window=dates,
                lock=True,
            )
            if not calendar:
                raise NotFound(f"Listing {command.listing_id} not found")

            calendar.ensure_can_reserve(dates)
            total_amount = calendar.quote(dates)

            order_id = self.gateway.create_order(
                total_amount.to_minor_units(),
                total_amount.currency,
                _receipt(),
                {"listing_id": command.listing_id, "user_id": command.user_id},
            )

            booking = Booking(
                listing_id=command.listing_id,
                user_id=command.user_id,
                dates=dates,
                total_amount=total_amount,
                gateway_order_id=order_id,
            )
            self.booking_repo.save(booking)

            booking.add_event(BookingCreated(
                aggregate_id=booking.id,
                booking_id=booking.id,
                listing_id=command.listing_id,
                user_id=command.user_id,
                start_date=dates.start_date,
                end_date=dates.end_date,
                total_amount=total_amount.amount,
                currency=total_amount.currency,
            ))
            uow.collect_events(booking)

        logger.info(
            f"Booking {booking.id} created: {booking.nights} night(s), "
            f"{booking.total_amount}, order {order_id}"
        )
        return booking


class ResumePaymentHandler:
    """Re-issue a gateway order; the earlier one may have expired"""

    def __init__(self, booking_repo, gateway):
        self.booking_repo = booking_repo
        self.gateway = gateway

    def handle(self, command: ResumePaymentCommand) -> Booking:
        with DjangoUnitOfWork() as uow:
            booking = _load_owned_booking(self.booking_repo, command.booking_id, command.requester_id)
            booking.ensure_resumable()

            order_id = self.gateway.create_order(
                booking.total_amount.to_minor_units(),
                booking.total_amount.currency,
                _receipt(),
                {"listing_id": booking.listing_id, "user_id": booking.user_id},
            )
            booking.reissue_order(order_id)

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        logger.info(f"Booking {booking.id} resumed payment with order {order_id}")
        return booking


class CancelBookingHandler:
    def __init__(self, booking_repo):
        self.booking_repo = booking_repo

    def handle(self, command: CancelBookingCommand) -> Booking:
        with DjangoUnitOfWork() as uow:
            booking = _load_owned_booking(self.booking_repo, command.booking_id, command.requester_id)
            booking.cancel(timezone.now())

            uow.collect_events(booking)
            self.booking_repo.save(booking)
            # Event: BookingCancelled (first cancellation only)

        logger.info(f"Booking {booking.id} cancelled, payment {booking.payment_status.value}")
        return booking


class FailPaymentHandler:
    def __init__(self, booking_repo):
        self.booking_repo = booking_repo

    def handle(self, command: FailPaymentCommand) -> Booking:
        with DjangoUnitOfWork() as uow:
            booking = _load_owned_booking(self.booking_repo, command.booking_id, command.requester_id)
            booking.fail_payment(command.reason)

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        logger.info(f"Booking {booking.id} payment failed ({command.reason})")
        return booking


class VerifyPaymentHandler:
    """
    Handler for gateway payment callbacks

    Ownership is checked before the signature. A valid signature confirms
    the booking; an invalid one fails it, and so does an order id that was
    never issued for this booking (a signed order of another booking cannot
    pay for this one). Replays that land on the state the
    booking is already in change nothing; a callback trying to move a
    booking out of a different final state raises Conflict.
    """

    def __init__(self, booking_repo, secret: str):
        self.booking_repo = booking_repo
        self.secret = secret

    def handle(self, command: VerifyPaymentCommand) -> PaymentVerification:
        with DjangoUnitOfWork() as uow:
            booking = _load_owned_booking(self.booking_repo, command.booking_id, command.requester_id)

            if not booking.has_issued_order(command.order_id):
                logger.warning(
                    f"Order {command.order_id} was not issued for booking {booking.id} "
                    f"(current order {booking.gateway_order_id})"
                )
                verified = False
                reason = 'order_mismatch'
            else:
                verified = verify_signature(
                    command.order_id,
                    command.payment_id,
                    command.signature,
                    self.secret,
                )
                reason = 'signature_mismatch'

            if verified:
                booking.confirm_payment(command.payment_id, command.signature, timezone.now())
            else:
                logger.warning(
                    f"Payment callback rejected for booking {booking.id} ({reason}): "
                    f"order {command.order_id}, payment {command.payment_id}"
                )
                booking.fail_payment(reason)

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        logger.info(
            f"Booking {booking.id} verification {'succeeded' if verified else 'failed'}: "
            f"{booking.status.value}/{booking.payment_status.value}"
        )
        return PaymentVerification(booking=booking, verified=verified)

