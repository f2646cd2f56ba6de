"""
Service catalogue routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from autocare.auth import get_current_staff, require_admin
from autocare.database import get_db
from autocare.models.service import ServiceCategory, ServiceItem
from autocare.models.staff import Staff, StaffRole
from autocare.schemas.service import ServiceItem as ServiceItemSchema, ServiceItemCreate, ServiceItemUpdate

router = APIRouter(prefix="/services", tags=["services"])


@router.get("/", response_model=List[ServiceItemSchema])
async def get_services(
    category: Optional[ServiceCategory] = None,
    include_inactive: bool = False,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Get the service catalogue, optionally filtered by category.

    Only admins may list retired services with ``include_inactive``.
    """
    if include_inactive and current_staff.role != StaffRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required"
        )

    query = select(ServiceItem).order_by(ServiceItem.id)

    if category:
        query = query.where(ServiceItem.category == category)
    if not include_inactive:
        query = query.where(ServiceItem.is_active.is_(True))

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{service_id}", response_model=ServiceItemSchema)
async def get_service(
    service_id: int,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Get a specific service by ID.
    """
    service = await db.get(ServiceItem, service_id)

    if not service:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service not found"
        )

    return service


@router.post("/", response_model=ServiceItemSchema, status_code=status.HTTP_201_CREATED)
async def create_service(
    service: ServiceItemCreate,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(require_admin)
):
    """
    Add a service to the catalogue.
    """
    result = await db.execute(select(ServiceItem).where(ServiceItem.name == service.name))
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Service name already exists"
        )

    db_service = ServiceItem(**service.model_dump())
    db.add(db_service)
    await db.commit()
    await db.refresh(db_service)

    return db_service


@router.put("/{service_id}", response_model=ServiceItemSchema)
async def update_service(
    service_id: int,
    service_update: ServiceItemUpdate,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(require_admin)
):
    """
    Update a service. Existing bookings keep the price they were booked at.
    """
    db_service = await db.get(ServiceItem, service_id)

    if not db_service:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service not found"
        )

    # Update only provided fields
    update_data = service_update.model_dump(exclude_unset=True)

    if "name" in update_data and update_data["name"] != db_service.name:
        result = await db.execute(select(ServiceItem).where(ServiceItem.name == update_data["name"]))
        if result.scalar_one_or_none():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Service name already exists"
            )

    for field, value in update_data.items():
        setattr(db_service, field, value)

    await db.commit()
    await db.refresh(db_service)

    return db_service
