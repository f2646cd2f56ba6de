"""Tests for the payment gateway client."""

import asyncio
import json

import httpx
import pytest

from autocare.exceptions import PaymentGatewayError
from autocare.payments import PaymentGateway


def gateway_with(handler, api_key="secret"):
    return PaymentGateway("https://gateway.test/api", api_key=api_key, transport=httpx.MockTransport(handler))


class TestPaymentGateway:
    def test_posts_booking_and_returns_link(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"paymentLink": "https://pay.test/abc"})

        link = asyncio.run(gateway_with(handler).create_payment_link("BK-250301-001", "+1555", 100.0))

        assert link == "https://pay.test/abc"
        assert seen["url"] == "https://gateway.test/api/createBookingPayment"
        assert seen["auth"] == "Bearer secret"
        assert seen["body"] == {"bookingId": "BK-250301-001", "customerPhone": "+1555", "amount": 100.0}

    def test_http_error_raises_gateway_error(self):
        gateway = gateway_with(lambda request: httpx.Response(500, json={"error": "boom"}))
        with pytest.raises(PaymentGatewayError):
            asyncio.run(gateway.create_payment_link("BK-1", "+1", 1.0))

    def test_missing_link_raises_gateway_error(self):
        gateway = gateway_with(lambda request: httpx.Response(200, json={}))
        with pytest.raises(PaymentGatewayError, match="no payment link"):
            asyncio.run(gateway.create_payment_link("BK-1", "+1", 1.0))

    def test_connection_error_raises_gateway_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(PaymentGatewayError):
            asyncio.run(gateway_with(handler).create_payment_link("BK-1", "+1", 1.0))

    def test_unconfigured_gateway_raises(self):
        gateway = PaymentGateway(None)
        assert not gateway.configured
        with pytest.raises(PaymentGatewayError, match="not configured"):
            asyncio.run(gateway.create_payment_link("BK-1", "+1", 1.0))
