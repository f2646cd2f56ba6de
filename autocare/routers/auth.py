"""
Authentication routes.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.auth import create_access_token, find_staff_by_pin, get_current_staff
from autocare.config import Settings, get_settings
from autocare.database import get_db
from autocare.models.staff import Staff
from autocare.schemas.staff import LoginRequest, Staff as StaffSchema, Token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Exchange a staff PIN for a bearer token.
    """
    staff = await find_staff_by_pin(db, credentials.pin)
    if staff is None:
        logger.warning("Rejected login with an invalid PIN")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid PIN"
        )

    logger.info("Staff member %s logged in", staff.id)
    return Token(
        access_token=create_access_token(staff.id, settings),
        staff=StaffSchema.model_validate(staff),
    )


@router.get("/me", response_model=StaffSchema)
async def read_current_staff(current_staff: Staff = Depends(get_current_staff)):
    """
    Get the staff member behind the current token.
    """
    return current_staff


@router.post("/logout")
async def logout(current_staff: Staff = Depends(get_current_staff)):
    """
    Acknowledge a logout. Tokens are stateless, so the client just drops it.
    """
    logger.info("Staff member %s logged out", current_staff.id)
    return {"message": "Logged out successfully"}
