"""
Pydantic schemas for Staff and Authentication.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from autocare.models.staff import StaffRole

PIN_PATTERN = r"^\d{4,8}$"


class StaffBase(BaseModel):
    """Base staff schema with common fields."""
    name: str = Field(min_length=1)
    role: StaffRole = StaffRole.STAFF


class StaffCreate(StaffBase):
    """Schema for creating a staff member."""
    pin: str = Field(pattern=PIN_PATTERN)


class Staff(StaffBase):
    """Schema for staff responses."""
    id: int
    is_active: bool = True
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    """Schema for PIN login."""
    pin: str = Field(pattern=PIN_PATTERN)


class Token(BaseModel):
    """Schema for authentication token."""
    access_token: str
    token_type: str = "bearer"
    staff: Staff
