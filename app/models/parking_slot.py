# app/models/parking_slot.py
"""
Parking slots table.
Owned by the slot allocator: status is one of available | occupied | reserved | maintenance,
current_session_id is set while the slot is occupied or reserved.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from app.database import Base


class ParkingSlot(Base):
    __tablename__ = "parking_slots"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    zone_id = Column(String(64), nullable=False, index=True)
    slot_number = Column(String(50), nullable=False)
    status = Column(String(20), default="available", nullable=False, index=True)
    current_session_id = Column(String(64))
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<ParkingSlot {self.slot_number} zone={self.zone_id} status={self.status}>"
