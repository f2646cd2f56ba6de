"""
PIN hashing, token issuing and the authentication dependencies.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.config import Settings, get_settings
from autocare.database import get_db
from autocare.models.staff import Staff, StaffRole

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{get_settings().api_v1_prefix}/auth/login")


def hash_pin(pin: str) -> str:
    return bcrypt.hashpw(pin.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_pin(pin: str, pin_hash: str) -> bool:
    try:
        return bcrypt.checkpw(pin.encode("utf-8"), pin_hash.encode("utf-8"))
    except ValueError:
        return False


async def find_staff_by_pin(db: AsyncSession, pin: str) -> Optional[Staff]:
    """
    Return the active staff member holding this PIN.

    PINs are salted, so each active hash has to be checked in turn.
    """
    result = await db.execute(select(Staff).where(Staff.is_active.is_(True)).order_by(Staff.id))
    for member in result.scalars():
        if verify_pin(pin, member.pin_hash):
            return member
    return None


def create_access_token(staff_id: int, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT for a staff member."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": str(staff_id), "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


async def get_current_staff(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Staff:
    """Resolve the bearer token to an active staff member."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        staff_id = int(payload["sub"])
    except (jwt.PyJWTError, KeyError, ValueError):
        raise credentials_exception

    staff = await db.get(Staff, staff_id)
    if staff is None or not staff.is_active:
        raise credentials_exception
    return staff


async def require_admin(current_staff: Staff = Depends(get_current_staff)) -> Staff:
    if current_staff.role != StaffRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required"
        )
    return current_staff
