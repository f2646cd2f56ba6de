"""
Pydantic schemas for the service catalogue.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from autocare.models.service import ServiceCategory


class ServiceItemBase(BaseModel):
    """Base service schema with common fields."""
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: ServiceCategory


class ServiceItemCreate(ServiceItemBase):
    """Schema for creating a service."""
    pass


class ServiceItemUpdate(BaseModel):
    """Schema for updating a service."""
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    category: Optional[ServiceCategory] = None
    is_active: Optional[bool] = None


class ServiceItem(ServiceItemBase):
    """Schema for service responses."""
    id: int
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)
