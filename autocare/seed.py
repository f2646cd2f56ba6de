"""
Default data for a fresh database.
"""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.auth import hash_pin
from autocare.config import Settings
from autocare.models.service import ServiceCategory, ServiceItem
from autocare.models.staff import Staff, StaffRole

logger = logging.getLogger(__name__)

DEFAULT_SERVICES = [
    ("Basic Car Wash", 25.0, ServiceCategory.WASH),
    ("Premium Car Wash", 45.0, ServiceCategory.WASH),
    ("Interior Cleaning", 35.0, ServiceCategory.WASH),
    ("Oil Change", 60.0, ServiceCategory.MAINTENANCE),
    ("Brake Inspection", 80.0, ServiceCategory.MAINTENANCE),
    ("Tire Rotation", 40.0, ServiceCategory.MAINTENANCE),
    ("Engine Diagnostic", 120.0, ServiceCategory.REPAIR),
    ("Battery Replacement", 150.0, ServiceCategory.REPAIR),
    ("AC Repair", 200.0, ServiceCategory.REPAIR),
]


async def seed_defaults(db: AsyncSession, settings: Settings) -> None:
    """Insert the service catalogue and an admin login if the tables are empty."""
    service_count = await db.scalar(select(func.count()).select_from(ServiceItem))
    if not service_count:
        db.add_all(
            ServiceItem(name=name, price=price, category=category)
            for name, price, category in DEFAULT_SERVICES
        )
        logger.info("Seeded %d default services", len(DEFAULT_SERVICES))

    staff_count = await db.scalar(select(func.count()).select_from(Staff))
    if not staff_count:
        db.add(Staff(
            name="Workshop Staff",
            role=StaffRole.ADMIN,
            pin_hash=hash_pin(settings.default_staff_pin),
        ))
        logger.info("Created default admin staff member")

    await db.commit()
