# app/models/parking_zone.py
"""
Parking zones table.
Read-only from the engine's perspective; seeded by scripts/setup/init_db.py.
`position` keeps the collection order stable across replace_all() calls.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean
from app.database import Base


class ParkingZone(Base):
    __tablename__ = "parking_zones"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    code = Column(String(50), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    total_capacity = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<ParkingZone {self.code} capacity={self.total_capacity}>"
