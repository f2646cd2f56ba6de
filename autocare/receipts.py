"""
HTML receipt rendering.
"""
from datetime import datetime
from functools import partial
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from autocare.booking_service import RECEIPT_STATUSES
from autocare.config import Settings
from autocare.exceptions import ReceiptUnavailable
from autocare.models.booking import Booking

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def format_receipt_datetime(value: datetime) -> str:
    """``Mar 14, 2025 - 09:30 AM``"""
    return value.strftime("%b %d, %Y - %I:%M %p")


def format_money(value: float, symbol: str = "$") -> str:
    return f"{symbol}{value:,.2f}"


def _environment(settings: Settings) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
    )
    env.filters["receipt_datetime"] = format_receipt_datetime
    env.filters["money"] = partial(format_money, symbol=settings.currency_symbol)
    return env


def receipt_filename(booking: Booking) -> str:
    return f"Receipt_{booking.booking_number}.html"


def render_receipt(booking: Booking, settings: Settings, auto_print: bool = False) -> str:
    """Render the printable receipt for a paid or completed booking."""
    if booking.status not in RECEIPT_STATUSES:
        raise ReceiptUnavailable(
            f"Receipts are only available for paid or completed bookings "
            f"({booking.booking_number} is {booking.status.value})"
        )

    template = _environment(settings).get_template("receipt.html")
    return template.render(
        booking=booking,
        workshop={
            "name": settings.workshop_name,
            "address": settings.workshop_address,
            "phone": settings.workshop_phone,
        },
        auto_print=auto_print,
    )
