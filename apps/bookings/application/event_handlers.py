"""
Booking Event Handlers

Reactions to booking events, run after the producing transaction commits.
Registered on the message bus from ``BookingsConfig.ready()``.
"""

import logging

from apps.bookings.domain.events import (
    BookingCancelled,
    BookingConfirmed,
    BookingCreated,
    PaymentFailed,
)
from shared.application.message_bus import message_bus

logger = logging.getLogger(__name__)


def queue_confirmation_email(event: BookingConfirmed):
    from apps.bookings.tasks import send_booking_confirmation_email

    send_booking_confirmation_email.delay(event.booking_id)


def log_booking_created(event: BookingCreated):
    logger.info(
        f"Booking {event.booking_id} awaiting payment: listing {event.listing_id}, "
        f"{event.start_date} - {event.end_date}, {event.total_amount} {event.currency}"
    )


def log_refund_request(event: BookingCancelled):
    if event.refund_requested:
        logger.info(f"Booking {event.booking_id} cancelled after payment; refund to be issued by the gateway")


def log_payment_failure(event: PaymentFailed):
    logger.warning(f"Payment for booking {event.booking_id} failed: {event.reason}")


def register_event_handlers(bus=message_bus):
    bus.register_event_handler(BookingCreated, log_booking_created)
    bus.register_event_handler(BookingConfirmed, queue_confirmation_email)
    bus.register_event_handler(BookingCancelled, log_refund_request)
    bus.register_event_handler(PaymentFailed, log_payment_failure)
