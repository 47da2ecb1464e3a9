# app/schemas/parking_session.py
from enum import Enum
from pydantic import BaseModel
from datetime import datetime
from typing import Literal, Optional


class SessionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


EntryMethod = Literal["qr", "manual", "app"]
ExitMethod = Literal["qr", "manual", "app", "automatic"]


class SessionRecord(BaseModel):
    id: str
    user_id: str
    vehicle_id: Optional[str] = None
    zone_id: Optional[str] = None
    slot_id: Optional[str] = None
    qr_code_id: Optional[str] = None
    entry_time: datetime
    exit_time: Optional[datetime] = None
    entry_method: str = "qr"
    exit_method: Optional[str] = None
    duration_minutes: Optional[int] = None
    base_rate: Optional[float] = None          # hourly, fixed at entry
    total_cost: Optional[float] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: Optional[str] = None
    status: SessionStatus = SessionStatus.ACTIVE
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_assignment = True
        validate_default = True


class StartSessionRequest(BaseModel):
    user_id: str
    qr_code_id: Optional[str] = None
    zoneId: Optional[str] = None
    slotId: Optional[str] = None
    entry_method: Optional[EntryMethod] = None


class EndSessionRequest(BaseModel):
    session_id: str
    exit_method: Optional[ExitMethod] = None


class EndSessionResult(BaseModel):
    session: SessionRecord
    duration_minutes: int
    total_cost: float
