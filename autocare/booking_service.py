"""
Booking workflow: numbering, pricing, customer bookkeeping, status changes
and payment links.

Routers call into these functions; they raise ``WorkshopError`` subclasses
for business-rule failures and leave HTTP concerns to the caller.
"""
import enum
import logging
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.config import Settings
from autocare.exceptions import (
    BookingConflict,
    InvalidStatusTransition,
    PaymentGatewayError,
    UnknownServiceError,
)
from autocare.models.booking import Booking, BookingStatus
from autocare.models.customer import Customer
from autocare.models.service import ServiceItem
from autocare.models.vehicle import Vehicle
from autocare.payments import PaymentGateway
from autocare.schemas.booking import BookingCreate, PaymentLinkResult, StatusCounts
from autocare.schemas.vehicle import CarDetails

logger = logging.getLogger(__name__)

DEMO_PAYMENT_MESSAGE = "Demo: Payment link would be sent to customer"

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.PAID, BookingStatus.CANCELLED},
    BookingStatus.PAID: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}

RECEIPT_STATUSES = (BookingStatus.PAID, BookingStatus.COMPLETED)


class BookingSort(str, enum.Enum):
    """Orderings offered on the bookings list."""
    NEWEST = "newest"
    OLDEST = "oldest"
    AMOUNT_HIGH = "amount-high"
    AMOUNT_LOW = "amount-low"
    CUSTOMER = "customer"


# Numbering

def booking_number_prefix(day: date) -> str:
    return f"BK-{day:%y%m%d}-"


async def generate_booking_number(db: AsyncSession, now: Optional[datetime] = None) -> str:
    """
    Next number for the day, e.g. ``BK-250314-007``.

    The suffix is a per-day sequence continuing from the highest number
    already issued with today's prefix.
    """
    prefix = booking_number_prefix((now or datetime.now()).date())
    result = await db.execute(
        select(Booking.booking_number).where(Booking.booking_number.startswith(prefix))
    )
    issued = [int(number[len(prefix):]) for number in result.scalars() if number[len(prefix):].isdigit()]
    return f"{prefix}{max(issued, default=0) + 1:03d}"


# Pricing

async def resolve_services(db: AsyncSession, service_ids: Sequence[int]) -> Tuple[List[dict], float]:
    """Look up the requested services and return ``(line_items, total)``."""
    wanted = list(dict.fromkeys(service_ids))
    result = await db.execute(
        select(ServiceItem).where(ServiceItem.id.in_(wanted), ServiceItem.is_active.is_(True))
    )
    found = {service.id: service for service in result.scalars()}

    missing = [service_id for service_id in wanted if service_id not in found]
    if missing:
        raise UnknownServiceError(
            f"Unknown or inactive service ids: {', '.join(str(i) for i in missing)}"
        )

    line_items = [{"name": found[i].name, "price": found[i].price} for i in wanted]
    return line_items, sum(item["price"] for item in line_items)


# Customers and vehicles

async def upsert_customer(db: AsyncSession, name: str, phone: str, amount: float) -> Customer:
    """Add ``amount`` to the customer with this phone, creating them if needed."""
    result = await db.execute(select(Customer).where(Customer.phone == phone))
    customer = result.scalar_one_or_none()
    if customer is None:
        customer = Customer(name=name, phone=phone, total_spent=amount)
        db.add(customer)
        await db.flush()
        logger.info("Created customer %s for %s", customer.id, phone)
    else:
        customer.total_spent = (customer.total_spent or 0.0) + amount
    return customer


async def upsert_vehicle(db: AsyncSession, customer: Customer, car: CarDetails) -> Vehicle:
    """Find the vehicle by plate and attach it to ``customer``, refreshing its details."""
    result = await db.execute(select(Vehicle).where(Vehicle.license_plate == car.license_plate))
    vehicle = result.scalar_one_or_none()
    if vehicle is None:
        vehicle = Vehicle(
            customer_id=customer.id,
            make=car.make,
            model=car.model,
            year=car.year,
            license_plate=car.license_plate,
        )
        db.add(vehicle)
    else:
        vehicle.customer_id = customer.id
        vehicle.make = car.make
        vehicle.model = car.model
        vehicle.year = car.year
    await db.flush()
    return vehicle


async def adjust_customer_total(db: AsyncSession, customer_id: int, delta: float) -> None:
    customer = await db.get(Customer, customer_id)
    if customer is not None:
        customer.total_spent = max(0.0, (customer.total_spent or 0.0) + delta)


# Lifecycle

async def create_booking(db: AsyncSession, data: BookingCreate) -> Booking:
    """
    Price, number and store a new pending booking.

    Raises ``BookingConflict`` when a concurrent request claims the same
    booking number, phone or plate first; nothing is written in that case.
    """
    line_items, total = await resolve_services(db, data.service_ids)
    try:
        customer = await upsert_customer(db, data.customer_name, data.customer_phone, total)
        vehicle = await upsert_vehicle(db, customer, data.car)

        booking = Booking(
            booking_number=await generate_booking_number(db),
            customer_id=customer.id,
            vehicle_id=vehicle.id,
            customer_name=data.customer_name,
            customer_phone=data.customer_phone,
            car_make=data.car.make,
            car_model=data.car.model,
            car_year=data.car.year,
            license_plate=data.car.license_plate,
            services=line_items,
            total_amount=total,
            status=BookingStatus.PENDING,
            scheduled_date=data.scheduled_date,
            notes=data.notes or None,
        )
        db.add(booking)
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Booking for %s conflicted with a concurrent write: %s", data.customer_phone, exc.orig)
        raise BookingConflict("Booking conflicted with another request, please retry") from exc
    logger.info("Created booking %s for %s (%.2f)", booking.booking_number, data.customer_phone, total)
    return booking


def check_transition(current: BookingStatus, new: BookingStatus) -> None:
    if new != current and new not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransition(
            f"Cannot change booking status from {current.value} to {new.value}"
        )


async def change_status(db: AsyncSession, booking: Booking, new_status: BookingStatus) -> Booking:
    """Apply a status transition and keep the customer's total in step."""
    check_transition(booking.status, new_status)
    if new_status == booking.status:
        return booking

    previous = booking.status
    now = datetime.now()
    if new_status == BookingStatus.PAID:
        booking.paid_at = now
    elif new_status == BookingStatus.COMPLETED:
        booking.completed_at = now
    elif new_status == BookingStatus.CANCELLED:
        await adjust_customer_total(db, booking.customer_id, -booking.total_amount)
    booking.status = new_status

    await db.commit()
    logger.info("Booking %s moved from %s to %s", booking.booking_number, previous.value, new_status.value)
    return booking


async def delete_booking(db: AsyncSession, booking: Booking) -> None:
    if booking.status != BookingStatus.CANCELLED:
        await adjust_customer_total(db, booking.customer_id, -booking.total_amount)
    await db.delete(booking)
    await db.commit()
    logger.info("Deleted booking %s", booking.booking_number)


async def send_payment_link(
    db: AsyncSession, booking: Booking, gateway: PaymentGateway, settings: Settings
) -> PaymentLinkResult:
    """
    Ask the gateway to text the customer a payment link.

    A gateway failure falls back to a demo acknowledgement when
    ``payment_demo_fallback`` is enabled and is re-raised otherwise.
    """
    if booking.status != BookingStatus.PENDING:
        raise InvalidStatusTransition(
            f"Payment links can only be sent for pending bookings (booking is {booking.status.value})"
        )

    try:
        link = await gateway.create_payment_link(
            booking.booking_number, booking.customer_phone, booking.total_amount
        )
    except PaymentGatewayError as exc:
        if not settings.payment_demo_fallback:
            logger.warning("Payment link for %s failed: %s", booking.booking_number, exc.detail)
            raise
        logger.warning("Using demo payment fallback for %s: %s", booking.booking_number, exc.detail)
        return PaymentLinkResult(sent=False, demo=True, message=DEMO_PAYMENT_MESSAGE)

    booking.payment_link = link
    await db.commit()
    logger.info("Payment link sent for %s", booking.booking_number)
    return PaymentLinkResult(
        sent=True,
        payment_link=link,
        message="Payment link sent to customer successfully",
    )


# Listing helpers; these work on already-loaded bookings

def matches_search(booking: Booking, term: Optional[str]) -> bool:
    if not term:
        return True
    needle = term.lower()
    return (
        needle in booking.booking_number.lower()
        or needle in booking.customer_name.lower()
        or term in booking.customer_phone
    )


def filter_bookings(
    bookings: Iterable[Booking],
    search: Optional[str] = None,
    status: Optional[BookingStatus] = None,
) -> List[Booking]:
    return [
        booking for booking in bookings
        if matches_search(booking, search) and (status is None or booking.status == status)
    ]


def sort_bookings(bookings: Iterable[Booking], sort: BookingSort = BookingSort.NEWEST) -> List[Booking]:
    if sort == BookingSort.OLDEST:
        return sorted(bookings, key=lambda b: (b.created_at, b.id))
    if sort == BookingSort.AMOUNT_HIGH:
        return sorted(bookings, key=lambda b: b.total_amount, reverse=True)
    if sort == BookingSort.AMOUNT_LOW:
        return sorted(bookings, key=lambda b: b.total_amount)
    if sort == BookingSort.CUSTOMER:
        return sorted(bookings, key=lambda b: b.customer_name.casefold())
    return sorted(bookings, key=lambda b: (b.created_at, b.id), reverse=True)


def count_by_status(bookings: Sequence[Booking]) -> StatusCounts:
    counts = StatusCounts(all=len(bookings))
    for booking in bookings:
        setattr(counts, booking.status.value, getattr(counts, booking.status.value) + 1)
    return counts


def scheduled_on(bookings: Iterable[Booking], day: date) -> List[Booking]:
    return [booking for booking in bookings if booking.scheduled_date.date() == day]


def total_revenue(bookings: Iterable[Booking]) -> float:
    return sum(b.total_amount for b in bookings if b.status in RECEIPT_STATUSES)


def monthly_revenue(bookings: Iterable[Booking], months: int, today: Optional[date] = None) -> List[dict]:
    """Income per calendar month for the last ``months`` months, oldest first."""
    today = today or date.today()
    keys = []
    year, month = today.year, today.month
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)
    keys.reverse()

    income = dict.fromkeys(keys, 0.0)
    for booking in bookings:
        key = f"{booking.created_at:%Y-%m}"
        if key in income and booking.status in RECEIPT_STATUSES:
            income[key] += booking.total_amount
    return [{"month": key, "income": value} for key, value in income.items()]


async def load_bookings(db: AsyncSession) -> List[Booking]:
    result = await db.execute(select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc()))
    return list(result.scalars().all())
