"""API views for the booking domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.payments.gateway import get_payment_gateway
from apps.users.permissions import IsTraveler

from .application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    FailPaymentCommand,
    FailPaymentHandler,
    ResumePaymentCommand,
    ResumePaymentHandler,
    VerifyPaymentCommand,
    VerifyPaymentHandler,
)
from .models import Booking
from .repositories import DjangoBookingRepository, DjangoReservationCalendarRepository
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    PaymentFailedSerializer,
    VerifyPaymentSerializer,
    checkout_payload,
)


class BookingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Bookings of the authenticated traveler.

    Bookings are never deleted through the API; they are cancelled. State
    changes go through the command handlers, which check ownership and
    answer 404/403/409 through the domain exception handler.
    """

    queryset = Booking.objects.select_related("listing", "user")
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated, IsTraveler]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        return super().get_queryset().filter(user=self.request.user)

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "verify_payment":
            return VerifyPaymentSerializer
        if self.action == "payment_failed":
            return PaymentFailedSerializer
        return BookingSerializer

    def get_gateway(self):
        return get_payment_gateway()

    def _booking_response(self, booking_id, http_status=status.HTTP_200_OK, gateway=None, **extra):
        booking = Booking.objects.select_related("listing", "user").get(pk=booking_id)
        data = {"booking": BookingSerializer(booking, context=self.get_serializer_context()).data}
        if gateway is not None:
            data["payment"] = checkout_payload(booking, gateway.key_id)
        data.update(extra)
        return Response(data, status=http_status)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        gateway = self.get_gateway()

        handler = CreateBookingHandler(
            DjangoBookingRepository(),
            DjangoReservationCalendarRepository(),
            gateway,
        )
        booking = handler.handle(CreateBookingCommand(
            listing_id=serializer.validated_data["listing"],
            user_id=request.user.id,
            start_date=serializer.validated_data["start_date"],
            end_date=serializer.validated_data["end_date"],
        ))

        return self._booking_response(booking.id, status.HTTP_201_CREATED, gateway=gateway)

    @action(detail=True, methods=["post"], url_path="resume-payment")
    def resume_payment(self, request, pk=None):  # type: ignore
        gateway = self.get_gateway()
        booking = ResumePaymentHandler(DjangoBookingRepository(), gateway).handle(
            ResumePaymentCommand(booking_id=pk, requester_id=request.user.id)
        )
        return self._booking_response(booking.id, gateway=gateway)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = CancelBookingHandler(DjangoBookingRepository()).handle(
            CancelBookingCommand(booking_id=pk, requester_id=request.user.id)
        )
        return self._booking_response(booking.id)

    @action(detail=True, methods=["post"], url_path="verify-payment")
    def verify_payment(self, request, pk=None):  # type: ignore
        serializer = VerifyPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = VerifyPaymentHandler(DjangoBookingRepository(), settings.RAZORPAY_KEY_SECRET)
        result = handler.handle(VerifyPaymentCommand(
            booking_id=pk,
            requester_id=request.user.id,
            **serializer.validated_data,
        ))
        return self._booking_response(result.booking.id, verified=result.verified)

    @action(detail=True, methods=["post"], url_path="payment-failed")
    def payment_failed(self, request, pk=None):  # type: ignore
        serializer = PaymentFailedSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = FailPaymentHandler(DjangoBookingRepository()).handle(
            FailPaymentCommand(
                booking_id=pk,
                requester_id=request.user.id,
                reason=serializer.validated_data["reason"],
            )
        )
        return self._booking_response(booking.id)
