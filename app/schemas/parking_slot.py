# app/schemas/parking_slot.py
from enum import Enum
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class SlotStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"


class SlotRecord(BaseModel):
    id: str
    zone_id: str
    slot_number: str
    status: SlotStatus = SlotStatus.AVAILABLE
    current_session_id: Optional[str] = None   # set while occupied / reserved
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_assignment = True
        validate_default = True


class ReserveSlotRequest(BaseModel):
    userId: str
    zoneId: str
    slotId: Optional[str] = None


class ReserveSlotResult(BaseModel):
    success: bool
    slotId: str
    sessionId: str
    message: str


class ToggleSlotStatusRequest(BaseModel):
    slotId: str
    status: SlotStatus
    sessionId: Optional[str] = None


class SlotStatisticsOut(BaseModel):
    total: int
    available: int
    occupied: int
    reserved: int
    maintenance: int
    used: int = Field(description="occupied + reserved")
    occupancy_percentage: int


class ZoneStatisticsOut(BaseModel):
    total_slots: int
    available_slots: int
    occupied_slots: int
    reserved_slots: int
    occupancy_percentage: int
