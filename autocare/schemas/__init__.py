"""
Pydantic schemas for request/response validation.
"""
from autocare.schemas.staff import StaffBase, StaffCreate, Staff, LoginRequest, Token
from autocare.schemas.service import ServiceItemBase, ServiceItemCreate, ServiceItemUpdate, ServiceItem
from autocare.schemas.vehicle import CarDetails, Vehicle
from autocare.schemas.booking import (
    LineItem, BookingCreate, BookingUpdate, StatusUpdate, Booking, BookingList,
    StatusCounts, PaymentLinkResult, BookingCreated,
)
from autocare.schemas.customer import CustomerUpdate, Customer, CustomerHistory
from autocare.schemas.dashboard import DashboardStats, MonthlyRevenue

__all__ = [
    "StaffBase", "StaffCreate", "Staff", "LoginRequest", "Token",
    "ServiceItemBase", "ServiceItemCreate", "ServiceItemUpdate", "ServiceItem",
    "CarDetails", "Vehicle",
    "LineItem", "BookingCreate", "BookingUpdate", "StatusUpdate", "Booking", "BookingList",
    "StatusCounts", "PaymentLinkResult", "BookingCreated",
    "CustomerUpdate", "Customer", "CustomerHistory",
    "DashboardStats", "MonthlyRevenue",
]
