from decimal import Decimal

from apps.bookings.models import Booking
from apps.bookings.serializers import checkout_payload
from shared.domain.value_objects import Money


def test_checkout_amount_matches_gateway_order_amount():
    booking = Booking(total_amount=Decimal("10.005"), currency="INR", gateway_order_id="order_1")

    payload = checkout_payload(booking, "rzp_test_key")

    assert payload["amount"] == Money(Decimal("10.005"), "INR").to_minor_units() == 1001
    assert payload == {
        "order_id": "order_1",
        "amount": 1001,
        "currency": "INR",
        "key_id": "rzp_test_key",
    }
