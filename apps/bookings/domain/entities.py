"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Main aggregate representing a reservation
- BookingStatus: Lifecycle state of the reservation
- PaymentStatus: Payment state tracking
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from shared.domain.base import Aggregate
from shared.domain.exceptions import Conflict, Forbidden
from shared.domain.value_objects import DateRange, Money


class BookingStatus(Enum):
    """
    Booking lifecycle

    State transitions (status/payment_status):
    - pending/pending -> confirmed/paid (verified payment callback)
    - pending/pending -> cancelled/failed (failed, forged or abandoned payment)
    - pending/pending -> cancelled/cancelled (owner cancelled before paying)
    - confirmed/paid -> cancelled/refunded (owner cancelled a paid booking)
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


class PaymentStatus(Enum):
    """Payment status tracking"""
    PENDING = 'pending'       # Order issued, waiting for the payer
    PAID = 'paid'             # Signature verified
    FAILED = 'failed'         # Callback failed verification or payer gave up
    REFUNDED = 'refunded'     # Paid booking cancelled; refund left to the gateway
    CANCELLED = 'cancelled'   # Cancelled before any payment


LIVE_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)
LIVE_PAYMENT_STATUSES = (PaymentStatus.PENDING, PaymentStatus.PAID)


@dataclass(eq=False, kw_only=True)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    A traveler's reservation of a listing for a date range.

    Key invariants:
    - dates.end_date is strictly after dates.start_date
    - total_amount = nights x nightly price, fixed at creation
    - live bookings (pending/confirmed with pending/paid payment) of one
      listing never overlap; enforced at creation by ReservationCalendar
    """

    listing_id: int | None
    user_id: int
    dates: DateRange
    total_amount: Money

    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING

    gateway_order_id: str = ''
    gateway_payment_id: str = ''
    gateway_signature: str = ''
    # Orders issued before the current one (resumed payments)
    previous_order_ids: list[str] = field(default_factory=list)

    paid_at: datetime | None = None
    cancelled_at: datetime | None = None

    # ----- Queries -----

    @property
    def is_live(self) -> bool:
        """Live bookings hold their dates against other travelers."""
        return self.status in LIVE_STATUSES and self.payment_status in LIVE_PAYMENT_STATUSES

    @property
    def is_awaiting_payment(self) -> bool:
        return self.status == BookingStatus.PENDING and self.payment_status == PaymentStatus.PENDING

    @property
    def is_paid(self) -> bool:
        return self.status == BookingStatus.CONFIRMED and self.payment_status == PaymentStatus.PAID

    @property
    def is_failed(self) -> bool:
        return self.status == BookingStatus.CANCELLED and self.payment_status == PaymentStatus.FAILED

    @property
    def nights(self) -> int:
        return self.dates.nights

    def ensure_owned_by(self, user_id: int):
        if self.user_id != user_id:
            raise Forbidden("Only the traveler who made this booking can do that.")

    # ----- Transitions -----

    def ensure_resumable(self):
        """Only a booking still waiting for payment can get a new order."""
        if not self.is_awaiting_payment:
            raise Conflict(
                f"Booking {self.id} cannot be paid: it is "
                f"{self.status.value}/{self.payment_status.value}."
            )

    def reissue_order(self, order_id: str):
        self.ensure_resumable()
        if self.gateway_order_id and self.gateway_order_id not in self.previous_order_ids:
            self.previous_order_ids.append(self.gateway_order_id)
        self.gateway_order_id = order_id

    def has_issued_order(self, order_id: str) -> bool:
        """True when ``order_id`` is the current or an earlier gateway order of this booking."""
        if not order_id:
            return False
        return order_id == self.gateway_order_id or order_id in self.previous_order_ids

    def confirm_payment(self, payment_id: str, signature: str, now: datetime):
        """
        Record a verified payment (pending/pending -> confirmed/paid)

        A replayed confirmation of an already paid booking re-assigns the
        same fields and emits nothing.
        Events: BookingConfirmed
        """
        from apps.bookings.domain.events import BookingConfirmed

        if self.is_paid:
            self.gateway_payment_id = payment_id
            self.gateway_signature = signature
            return
        if not self.is_awaiting_payment:
            raise Conflict(
                f"Booking {self.id} is {self.status.value}/{self.payment_status.value} "
                f"and cannot be confirmed."
            )

        self.status = BookingStatus.CONFIRMED
        self.payment_status = PaymentStatus.PAID
        self.gateway_payment_id = payment_id
        self.gateway_signature = signature
        self.paid_at = now

        self.add_event(BookingConfirmed(
            aggregate_id=self.id,
            booking_id=self.id,
            listing_id=self.listing_id,
            user_id=self.user_id,
            payment_id=payment_id,
        ))

    def fail_payment(self, reason: str):
        """
        Payment failed or was abandoned (pending/pending -> cancelled/failed)

        Repeating it on an already failed booking changes nothing.
        Events: PaymentFailed
        """
        from apps.bookings.domain.events import PaymentFailed

        if self.is_failed:
            return
        if not self.is_awaiting_payment:
            raise Conflict(
                f"Booking {self.id} is {self.status.value}/{self.payment_status.value}; "
                f"its payment can no longer fail."
            )

        self.status = BookingStatus.CANCELLED
        self.payment_status = PaymentStatus.FAILED

        self.add_event(PaymentFailed(
            aggregate_id=self.id,
            booking_id=self.id,
            listing_id=self.listing_id,
            reason=reason,
        ))

    def cancel(self, now: datetime):
        """
        Owner cancellation

        Paid bookings become refunded, unpaid ones cancelled; other payment
        states are left alone. Cancelling twice changes nothing.
        Events: BookingCancelled
        """
        from apps.bookings.domain.events import BookingCancelled

        if self.status == BookingStatus.CANCELLED:
            return

        previous = self.status
        if self.payment_status == PaymentStatus.PAID:
            self.payment_status = PaymentStatus.REFUNDED
        elif self.payment_status == PaymentStatus.PENDING:
            self.payment_status = PaymentStatus.CANCELLED
        self.status = BookingStatus.CANCELLED
        self.cancelled_at = now

        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            booking_id=self.id,
            listing_id=self.listing_id,
            previous_status=previous.value,
            refund_requested=self.payment_status == PaymentStatus.REFUNDED,
        ))

    def __str__(self):
        return f"Booking {self.id} ({self.status.value}/{self.payment_status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, listing_id={self.listing_id}, "
            f"status={self.status.value}, payment_status={self.payment_status.value}, "
            f"dates={self.dates})"
        )
