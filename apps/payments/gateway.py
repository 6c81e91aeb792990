"""
Payment gateway client (Razorpay-compatible orders API).

Booking handlers receive a ``PaymentGateway`` through their constructor;
``get_payment_gateway()`` builds the configured one for the views.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Mapping

import requests
from django.conf import settings  # type: ignore
from django.utils.module_loading import import_string  # type: ignore

from shared.domain.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


class PaymentGatewayError(UpstreamFailure):
    """The gateway could not be reached or refused to create the order."""

    code = "payment_gateway_unavailable"
    default_message = "Payment gateway is unavailable, please retry."


@dataclass(frozen=True)
class GatewaySettings:
    key_id: str = ""
    key_secret: str = ""
    api_base_url: str = "https://api.razorpay.com/v1/"
    currency: str = "INR"
    timeout: float = 30

    @classmethod
    def from_django(cls) -> "GatewaySettings":
        return cls(
            key_id=getattr(settings, "RAZORPAY_KEY_ID", ""),
            key_secret=getattr(settings, "RAZORPAY_KEY_SECRET", ""),
            api_base_url=getattr(settings, "RAZORPAY_API_BASE_URL", cls.api_base_url),
            currency=getattr(settings, "PAYMENT_CURRENCY", cls.currency),
            timeout=getattr(settings, "PAYMENT_GATEWAY_TIMEOUT", cls.timeout),
        )


class PaymentGateway:
    """Creates remote payment orders. Implementations return the order id."""

    def __init__(self, config: GatewaySettings | None = None):
        self.config = config or GatewaySettings.from_django()

    @property
    def key_id(self) -> str:
        return self.config.key_id

    def create_order(
        self,
        amount_minor_units: int,
        currency: str,
        receipt: str,
        notes: Mapping[str, Any] | None = None,
    ) -> str:
        raise NotImplementedError


class RazorpayGateway(PaymentGateway):
    def create_order(self, amount_minor_units, currency, receipt, notes=None):  # type: ignore
        logger.info(f"Creating gateway order {receipt}: {amount_minor_units} {currency}")
        payload = {
            "amount": int(amount_minor_units),
            "currency": currency,
            "receipt": receipt,
            "notes": {key: str(value) for key, value in (notes or {}).items()},
        }

        try:
            response = requests.post(
                f"{self.config.api_base_url.rstrip('/')}/orders",
                json=payload,
                auth=(self.config.key_id, self.config.key_secret),
                headers={"Accept": "application/json"},
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error talking to the payment gateway: {e}")
            raise PaymentGatewayError(f"Payment gateway request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Payment gateway returned a non-JSON body: {e}")
            raise PaymentGatewayError("Payment gateway returned an invalid response") from e

        order_id = result.get("id")
        if not order_id:
            error_msg = result.get("error", {}).get("description", "missing order id")
            logger.error(f"Payment gateway rejected order {receipt}: {error_msg}")
            raise PaymentGatewayError(f"Payment gateway error: {error_msg}")

        logger.info(f"Gateway order {order_id} created for {receipt}")
        return order_id


class EmulatedGateway(PaymentGateway):
    """Local stand-in used in development and tests; no network traffic."""

    def __init__(self, config: GatewaySettings | None = None):
        super().__init__(config)
        self.orders: list[dict[str, Any]] = []

    def create_order(self, amount_minor_units, currency, receipt, notes=None):  # type: ignore
        order_id = f"order_{uuid.uuid4().hex[:14]}"
        self.orders.append(
            {
                "id": order_id,
                "amount": int(amount_minor_units),
                "currency": currency,
                "receipt": receipt,
                "notes": dict(notes or {}),
            }
        )
        logger.warning(f"Emulated gateway order {order_id} for {receipt} (no API key or DEBUG)")
        return order_id


def get_payment_gateway() -> PaymentGateway:
    """Gateway selected by ``PAYMENT_GATEWAY_BACKEND``.

    Without an explicit backend the real gateway is used when an API key is
    configured and DEBUG is off, the emulator otherwise.
    """
    config = GatewaySettings.from_django()
    backend = getattr(settings, "PAYMENT_GATEWAY_BACKEND", "")
    if backend:
        return import_string(backend)(config)
    if settings.DEBUG or not config.key_id:
        return EmulatedGateway(config)
    return RazorpayGateway(config)
