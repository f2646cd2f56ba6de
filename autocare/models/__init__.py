"""
SQLAlchemy database models.
"""
from autocare.models.staff import Staff, StaffRole
from autocare.models.service import ServiceItem, ServiceCategory
from autocare.models.customer import Customer
from autocare.models.vehicle import Vehicle
from autocare.models.booking import Booking, BookingStatus

__all__ = [
    "Staff", "StaffRole",
    "ServiceItem", "ServiceCategory",
    "Customer",
    "Vehicle",
    "Booking", "BookingStatus",
]
