# app/schemas/parking_zone.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class ZoneRecord(BaseModel):
    id: str
    code: str
    name: str
    description: Optional[str] = None
    total_capacity: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
