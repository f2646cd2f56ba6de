"""
Staff model for database.
"""
from datetime import datetime
from sqlalchemy import Boolean, Column, Integer, String, DateTime, Enum as SQLEnum
from autocare.database import Base
import enum


class StaffRole(str, enum.Enum):
    """Staff role enumeration."""
    ADMIN = "admin"
    STAFF = "staff"


class Staff(Base):
    """Workshop staff member who signs in with a PIN."""

    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    role = Column(SQLEnum(StaffRole), default=StaffRole.STAFF, nullable=False)
    pin_hash = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
