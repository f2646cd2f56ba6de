"""
Customer routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, or_, select
from typing import List, Sequence

from autocare.auth import get_current_staff
from autocare.database import get_db
from autocare.models.booking import Booking
from autocare.models.customer import Customer
from autocare.models.staff import Staff
from autocare.models.vehicle import Vehicle
from autocare.schemas.booking import Booking as BookingSchema
from autocare.schemas.customer import Customer as CustomerSchema, CustomerHistory, CustomerUpdate
from autocare.schemas.vehicle import Vehicle as VehicleSchema

router = APIRouter(prefix="/customers", tags=["customers"])


async def with_booking_counts(db: AsyncSession, customers: Sequence[Customer]) -> List[CustomerSchema]:
    ids = [customer.id for customer in customers]
    counts = {}
    if ids:
        result = await db.execute(
            select(Booking.customer_id, func.count(Booking.id))
            .where(Booking.customer_id.in_(ids))
            .group_by(Booking.customer_id)
        )
        counts = dict(result.all())
    return [
        CustomerSchema.model_validate(customer).model_copy(update={"booking_count": counts.get(customer.id, 0)})
        for customer in customers
    ]


async def get_customer_or_404(db: AsyncSession, customer_id: int) -> Customer:
    customer = await db.get(Customer, customer_id)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )
    return customer


@router.get("/", response_model=List[CustomerSchema])
async def get_customers(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Get all customers, newest first.
    """
    result = await db.execute(
        select(Customer).order_by(Customer.created_at.desc(), Customer.id.desc()).offset(skip).limit(limit)
    )
    return await with_booking_counts(db, result.scalars().all())


@router.get("/search", response_model=List[CustomerSchema])
async def search_customers(
    phone: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Find customers whose phone number contains the given digits.
    """
    result = await db.execute(
        select(Customer)
        .where(Customer.phone.contains(phone.strip(), autoescape=True))
        .order_by(Customer.created_at.desc(), Customer.id.desc())
    )
    return await with_booking_counts(db, result.scalars().all())


@router.get("/{customer_id}", response_model=CustomerSchema)
async def get_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Get a specific customer by ID.
    """
    customer = await get_customer_or_404(db, customer_id)
    return (await with_booking_counts(db, [customer]))[0]


@router.get("/{customer_id}/history", response_model=CustomerHistory)
async def get_customer_history(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Get a customer with their vehicles and every booking, newest first.
    """
    customer = await get_customer_or_404(db, customer_id)

    bookings = await db.execute(
        select(Booking)
        .where(or_(Booking.customer_id == customer.id, Booking.customer_phone == customer.phone))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    vehicles = await db.execute(
        select(Vehicle).where(Vehicle.customer_id == customer.id).order_by(Vehicle.id)
    )
    booking_list = bookings.scalars().all()

    return CustomerHistory(
        customer=CustomerSchema.model_validate(customer).model_copy(update={"booking_count": len(booking_list)}),
        vehicles=[VehicleSchema.model_validate(v) for v in vehicles.scalars().all()],
        bookings=[BookingSchema.model_validate(b) for b in booking_list],
    )


@router.put("/{customer_id}", response_model=CustomerSchema)
async def update_customer(
    customer_id: int,
    customer_update: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff)
):
    """
    Update a customer.
    """
    db_customer = await get_customer_or_404(db, customer_id)

    # Update only provided fields
    update_data = customer_update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(db_customer, field, value)

    await db.commit()
    await db.refresh(db_customer)

    return (await with_booking_counts(db, [db_customer]))[0]
