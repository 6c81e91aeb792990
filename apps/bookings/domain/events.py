"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from decimal import Decimal
from datetime import date

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    """
    Event: A pending booking was created and a gateway order issued
    """
    booking_id: int
    listing_id: int
    user_id: int
    start_date: date
    end_date: date
    total_amount: Decimal
    currency: str


@dataclass(kw_only=True)
class BookingConfirmed(DomainEvent):
    """
    Event: Payment verified (pending/pending -> confirmed/paid)

    Triggers:
    - Send booking confirmation email to the traveler
    """
    booking_id: int
    listing_id: int | None
    user_id: int
    payment_id: str


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """
    Event: Booking was cancelled by its owner

    ``refund_requested`` is set when a paid booking was cancelled; moving
    the money back is the gateway's job.
    """
    booking_id: int
    listing_id: int | None
    previous_status: str
    refund_requested: bool


@dataclass(kw_only=True)
class PaymentFailed(DomainEvent):
    """
    Event: Payment failed verification or was abandoned (-> cancelled/failed)
    """
    booking_id: int
    listing_id: int | None
    reason: str
