"""
Service catalogue model for database.
"""
from sqlalchemy import Boolean, Column, Integer, String, Float, Enum as SQLEnum
from autocare.database import Base
import enum


class ServiceCategory(str, enum.Enum):
    """Service category enumeration."""
    WASH = "wash"
    REPAIR = "repair"
    MAINTENANCE = "maintenance"


class ServiceItem(Base):
    """A priced service the workshop offers."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    price = Column(Float, nullable=False)
    category = Column(SQLEnum(ServiceCategory), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
