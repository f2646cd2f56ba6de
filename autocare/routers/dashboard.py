"""
Dashboard routes.
"""
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from autocare import booking_service
from autocare.auth import get_current_staff
from autocare.database import get_db
from autocare.models.booking import BookingStatus
from autocare.models.staff import Staff
from autocare.schemas.booking import Booking as BookingSchema
from autocare.schemas.dashboard import DashboardStats, MonthlyRevenue

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/", response_model=DashboardStats)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Overview of today's work and outstanding payments.
    """
    bookings = await booking_service.load_bookings(db)
    today = booking_service.scheduled_on(bookings, date.today())
    pending = booking_service.filter_bookings(bookings, status=BookingStatus.PENDING)

    return DashboardStats(
        today_bookings=len(today),
        pending_payments=len(pending),
        total_revenue=booking_service.total_revenue(bookings),
        completed_bookings=sum(1 for b in bookings if b.status == BookingStatus.COMPLETED),
        today=[BookingSchema.model_validate(b) for b in today[:3]],
        awaiting_payment=[BookingSchema.model_validate(b) for b in pending[:5]],
    )


@router.get("/revenue", response_model=List[MonthlyRevenue])
async def get_monthly_revenue(
    months: int = Query(6, ge=1, le=24),
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Income from paid and completed bookings per month.
    """
    bookings = await booking_service.load_bookings(db)
    return booking_service.monthly_revenue(bookings, months)
