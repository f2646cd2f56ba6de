"""
Receipt routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from autocare import booking_service
from autocare.auth import get_current_staff
from autocare.booking_service import RECEIPT_STATUSES
from autocare.config import Settings, get_settings
from autocare.database import get_db
from autocare.models.booking import Booking
from autocare.models.staff import Staff
from autocare.receipts import receipt_filename, render_receipt
from autocare.schemas.booking import Booking as BookingSchema

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.get("/", response_model=List[BookingSchema])
async def get_receipts(
    search: str = "",
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    List paid and completed bookings, newest first.
    """
    bookings = await booking_service.load_bookings(db)
    eligible = [b for b in bookings if b.status in RECEIPT_STATUSES]
    return booking_service.filter_bookings(eligible, search.strip())


@router.get("/{booking_id}", response_class=HTMLResponse)
async def get_receipt(
    booking_id: int,
    download: bool = False,
    print_receipt: bool = Query(False, alias="print"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Render a receipt as HTML.

    ``download=true`` serves it as an attachment; ``print=true`` opens
    the browser's print dialog when the page loads.
    """
    booking = await db.get(Booking, booking_id)
    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found"
        )

    content = render_receipt(booking, settings, auto_print=print_receipt)
    headers = {}
    if download:
        headers["Content-Disposition"] = f'attachment; filename="{receipt_filename(booking)}"'
    return HTMLResponse(content=content, headers=headers)
