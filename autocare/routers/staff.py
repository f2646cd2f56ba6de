"""
Staff management routes (admin only).
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from autocare.auth import find_staff_by_pin, hash_pin, require_admin
from autocare.database import get_db
from autocare.models.staff import Staff
from autocare.schemas.staff import Staff as StaffSchema, StaffCreate

router = APIRouter(prefix="/staff", tags=["staff"])


@router.get("/", response_model=List[StaffSchema])
async def get_staff(
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(require_admin)
):
    """
    Get all staff members.
    """
    result = await db.execute(select(Staff).order_by(Staff.id))
    return result.scalars().all()


@router.post("/", response_model=StaffSchema, status_code=status.HTTP_201_CREATED)
async def create_staff(
    member: StaffCreate,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(require_admin)
):
    """
    Create a staff member with their own PIN.
    """
    # A PIN has to identify exactly one active staff member
    if await find_staff_by_pin(db, member.pin):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="PIN already in use"
        )

    db_staff = Staff(name=member.name, role=member.role, pin_hash=hash_pin(member.pin))
    db.add(db_staff)
    await db.commit()
    await db.refresh(db_staff)

    return db_staff


@router.delete("/{staff_id}", response_model=StaffSchema)
async def deactivate_staff(
    staff_id: int,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(require_admin)
):
    """
    Deactivate a staff member. Their tokens stop working immediately.
    """
    db_staff = await db.get(Staff, staff_id)
    if not db_staff:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Staff member not found"
        )
    if db_staff.id == current_staff.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot deactivate yourself"
        )

    db_staff.is_active = False
    await db.commit()
    await db.refresh(db_staff)

    return db_staff
