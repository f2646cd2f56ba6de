"""
Pydantic schemas for the dashboard.
"""
from pydantic import BaseModel
from typing import List
from autocare.schemas.booking import Booking


class DashboardStats(BaseModel):
    """Headline numbers and short lists for the dashboard."""
    today_bookings: int
    pending_payments: int
    total_revenue: float
    completed_bookings: int
    today: List[Booking]
    awaiting_payment: List[Booking]


class MonthlyRevenue(BaseModel):
    """Income collected in one calendar month."""
    month: str
    income: float
