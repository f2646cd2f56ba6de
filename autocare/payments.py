"""
Client for the hosted payment-link service.

The gateway receives the booking reference, the customer's phone number and
the amount, texts the customer a link and echoes the link back to us.
"""
import logging
from typing import Optional

import httpx
from fastapi import Depends

from autocare.config import Settings, get_settings
from autocare.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)


class PaymentGateway:
    """Thin async wrapper around the gateway's ``createBookingPayment`` call."""

    def __init__(self, base_url: Optional[str], api_key: Optional[str] = None,
                 timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    async def create_payment_link(self, booking_number: str, customer_phone: str, amount: float) -> str:
        if not self.configured:
            raise PaymentGatewayError("Payment gateway is not configured")

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        payload = {
            "bookingId": booking_number,
            "customerPhone": customer_phone,
            "amount": amount,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post("/createBookingPayment", json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Payment gateway call failed for %s: %s", booking_number, exc)
            raise PaymentGatewayError("Payment gateway request failed") from exc

        link = data.get("paymentLink") if isinstance(data, dict) else None
        if not link:
            raise PaymentGatewayError("Payment gateway returned no payment link")
        return link


def get_payment_gateway(settings: Settings = Depends(get_settings)) -> PaymentGateway:
    return PaymentGateway(
        settings.payment_gateway_url,
        api_key=settings.payment_gateway_api_key,
        timeout=settings.payment_gateway_timeout,
    )
