"""
Pydantic schemas for Vehicle.
"""
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

MIN_VEHICLE_YEAR = 1990


class CarDetails(BaseModel):
    """Car details captured on a booking form."""
    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: int
    license_plate: str = Field(min_length=1)

    @field_validator("year")
    @classmethod
    def year_in_range(cls, value: int) -> int:
        latest = date.today().year + 1
        if not MIN_VEHICLE_YEAR <= value <= latest:
            raise ValueError(f"year must be between {MIN_VEHICLE_YEAR} and {latest}")
        return value

    @field_validator("license_plate")
    @classmethod
    def normalise_plate(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("license plate is required")
        return value


class Vehicle(BaseModel):
    """Schema for vehicle responses."""
    id: int
    customer_id: int
    make: str
    model: str
    year: int
    license_plate: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
