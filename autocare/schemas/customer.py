"""
Pydantic schemas for Customer.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional

from autocare.schemas.booking import Booking
from autocare.schemas.vehicle import Vehicle


class CustomerUpdate(BaseModel):
    """Schema for updating a customer."""
    name: Optional[str] = Field(default=None, min_length=1)


class Customer(BaseModel):
    """Schema for customer responses."""
    id: int
    name: str
    phone: str
    total_spent: float
    booking_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CustomerHistory(BaseModel):
    """A customer together with their vehicles and bookings, newest first."""
    customer: Customer
    vehicles: List[Vehicle]
    bookings: List[Booking]
