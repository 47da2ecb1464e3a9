# app/schemas/identity.py
"""Read models returned by the identity store."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class UserOut(BaseModel):
    id: str
    email: str
    full_name: str
    institutional_id: Optional[str] = None
    role_id: Optional[int] = None
    is_active: bool = True
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoleOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class PricingRuleOut(BaseModel):
    id: int
    role_id: int
    rate_per_hour: float

    class Config:
        from_attributes = True


class VehicleOut(BaseModel):
    id: str
    user_id: str
    plate_number: str
    make: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None

    class Config:
        from_attributes = True


class QRCodeOut(BaseModel):
    id: str
    user_id: str
    qr_value: str
    is_active: bool = True

    class Config:
        from_attributes = True
