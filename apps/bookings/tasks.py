"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore

from .models import Booking

logger = logging.getLogger(__name__)


@shared_task(name="bookings.send_booking_confirmation_email")
def send_booking_confirmation_email(booking_id: int) -> bool:
    """Email the traveler that their payment went through."""

    try:
        booking = Booking.objects.select_related("user", "listing").get(pk=booking_id)
    except Booking.DoesNotExist:
        logger.warning(f"Booking {booking_id} vanished before its confirmation email was sent")
        return False

    if not booking.user.email:
        return False

    title = booking.listing.title if booking.listing else "your stay"
    message = (
        f"Your booking of {title} from {booking.start_date:%d %b %Y} "
        f"to {booking.end_date:%d %b %Y} is confirmed.\n"
        f"Amount paid: {booking.total_amount} {booking.currency}\n"
        f"Payment reference: {booking.gateway_payment_id}"
    )
    send_mail(
        subject=f"Booking #{booking.pk} confirmed",
        message=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[booking.user.email],
    )
    logger.info(f"Confirmation email sent for booking {booking.pk}")
    return True
