"""
Pydantic schemas for Booking.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import List, Optional
from autocare.models.booking import BookingStatus
from autocare.schemas.vehicle import CarDetails


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Store workshop-local wall-clock times; aware values are converted first."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class LineItem(BaseModel):
    """A service as it was priced when booked."""
    name: str
    price: float


class BookingCreate(BaseModel):
    """Schema for creating a booking."""
    model_config = ConfigDict(str_strip_whitespace=True)

    customer_name: str = Field(min_length=1)
    customer_phone: str = Field(min_length=1)
    car: CarDetails
    service_ids: List[int] = Field(min_length=1)
    scheduled_date: datetime
    notes: Optional[str] = None
    send_payment_link: bool = True

    @field_validator("scheduled_date")
    @classmethod
    def scheduled_local(cls, value):
        return to_local_naive(value)


class BookingUpdate(BaseModel):
    """Schema for updating a booking."""
    scheduled_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("scheduled_date")
    @classmethod
    def scheduled_local(cls, value):
        return to_local_naive(value)


class StatusUpdate(BaseModel):
    """Schema for a status change."""
    status: BookingStatus


class Booking(BaseModel):
    """Schema for booking responses."""
    id: int
    booking_number: str
    customer_id: int
    vehicle_id: Optional[int] = None
    customer_name: str
    customer_phone: str
    car_make: str
    car_model: str
    car_year: int
    license_plate: str
    services: List[LineItem]
    total_amount: float
    status: BookingStatus
    scheduled_date: datetime
    payment_link: Optional[str] = None
    notes: Optional[str] = None
    paid_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BookingList(BaseModel):
    """A filtered, sorted page of bookings."""
    items: List[Booking]
    total: int
    matched: int


class StatusCounts(BaseModel):
    """Number of bookings per status."""
    all: int = 0
    pending: int = 0
    paid: int = 0
    completed: int = 0
    cancelled: int = 0


class PaymentLinkResult(BaseModel):
    """Outcome of asking the payment gateway for a link."""
    sent: bool
    demo: bool = False
    payment_link: Optional[str] = None
    message: str


class BookingCreated(BaseModel):
    """Response for a newly created booking."""
    booking: Booking
    payment: Optional[PaymentLinkResult] = None
