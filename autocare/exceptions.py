"""
Domain errors raised by the booking logic and mapped to HTTP responses in main.
"""
from fastapi import status


class WorkshopError(Exception):
    """Base class for business-rule failures."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class UnknownServiceError(WorkshopError):
    """A booking referenced a service that is missing or inactive."""


class InvalidStatusTransition(WorkshopError):
    status_code = status.HTTP_409_CONFLICT


class ReceiptUnavailable(WorkshopError):
    """Receipts exist only for paid or completed bookings."""

    status_code = status.HTTP_409_CONFLICT


class PaymentGatewayError(WorkshopError):
    status_code = status.HTTP_502_BAD_GATEWAY


class BookingConflict(WorkshopError):
    """A concurrent write claimed the same booking number, phone or plate."""

    status_code = status.HTTP_409_CONFLICT
