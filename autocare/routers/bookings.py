"""
Booking routes.
"""
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Literal

from autocare import booking_service
from autocare.auth import get_current_staff, require_admin
from autocare.booking_service import BookingSort
from autocare.config import Settings, get_settings
from autocare.database import get_db
from autocare.exceptions import PaymentGatewayError
from autocare.models.booking import Booking, BookingStatus
from autocare.models.staff import Staff
from autocare.payments import PaymentGateway, get_payment_gateway
from autocare.schemas.booking import (
    Booking as BookingSchema,
    BookingCreate,
    BookingCreated,
    BookingList,
    BookingUpdate,
    PaymentLinkResult,
    StatusCounts,
    StatusUpdate,
)

router = APIRouter(prefix="/bookings", tags=["bookings"])

StatusFilter = Literal["all", "pending", "paid", "completed", "cancelled"]


async def get_booking_or_404(db: AsyncSession, booking_id: int) -> Booking:
    booking = await db.get(Booking, booking_id)
    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found"
        )
    return booking


@router.get("/", response_model=BookingList)
async def get_bookings(
    search: str = "",
    status_filter: StatusFilter = Query("all", alias="status"),
    sort: BookingSort = BookingSort.NEWEST,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Search, filter and sort bookings.

    ``search`` matches the booking number or customer name (case-insensitive)
    or part of the phone number.
    """
    bookings = await booking_service.load_bookings(db)
    wanted = None if status_filter == "all" else BookingStatus(status_filter)
    matched = booking_service.sort_bookings(
        booking_service.filter_bookings(bookings, search.strip(), wanted), sort
    )
    return BookingList(
        items=[BookingSchema.model_validate(b) for b in matched[skip:skip + limit]],
        total=len(bookings),
        matched=len(matched),
    )


@router.get("/stats", response_model=StatusCounts)
async def get_booking_stats(
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Count bookings per status.
    """
    return booking_service.count_by_status(await booking_service.load_bookings(db))


@router.get("/today", response_model=List[BookingSchema])
async def get_today_bookings(
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Get bookings scheduled for today.
    """
    return booking_service.scheduled_on(await booking_service.load_bookings(db), date.today())


@router.get("/pending-payments", response_model=List[BookingSchema])
async def get_pending_payments(
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Get bookings still awaiting payment.
    """
    bookings = await booking_service.load_bookings(db)
    return booking_service.filter_bookings(bookings, status=BookingStatus.PENDING)


@router.post("/", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking: BookingCreate,
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Create a booking and, unless told otherwise, text the customer a payment link.
    """
    db_booking = await booking_service.create_booking(db, booking)

    payment = None
    if booking.send_payment_link:
        # The booking is already committed; report a failed link instead of a 502
        try:
            payment = await booking_service.send_payment_link(db, db_booking, gateway, settings)
        except PaymentGatewayError as exc:
            payment = PaymentLinkResult(sent=False, message=exc.detail)

    return BookingCreated(booking=BookingSchema.model_validate(db_booking), payment=payment)


@router.get("/{booking_id}", response_model=BookingSchema)
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Get a specific booking by ID.
    """
    return await get_booking_or_404(db, booking_id)


@router.put("/{booking_id}", response_model=BookingSchema)
async def update_booking(
    booking_id: int,
    booking_update: BookingUpdate,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Reschedule a booking or edit its notes.
    """
    db_booking = await get_booking_or_404(db, booking_id)

    # Update only provided fields
    update_data = booking_update.model_dump(exclude_unset=True)
    if update_data.get("scheduled_date", db_booking.scheduled_date) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="scheduled_date cannot be cleared"
        )
    for field, value in update_data.items():
        setattr(db_booking, field, value)

    await db.commit()
    await db.refresh(db_booking)

    return db_booking


@router.patch("/{booking_id}/status", response_model=BookingSchema)
async def update_booking_status(
    booking_id: int,
    status_update: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Move a booking along pending -> paid -> completed, or cancel it.
    """
    db_booking = await get_booking_or_404(db, booking_id)
    return await booking_service.change_status(db, db_booking, status_update.status)


@router.post("/{booking_id}/payment-link", response_model=PaymentLinkResult)
async def send_payment_link(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    (Re)send the payment link for a pending booking.
    """
    db_booking = await get_booking_or_404(db, booking_id)
    return await booking_service.send_payment_link(db, db_booking, gateway, settings)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(require_admin)
):
    """
    Delete a booking.
    """
    db_booking = await get_booking_or_404(db, booking_id)
    await booking_service.delete_booking(db, db_booking)

    return None
