# app/models/parking_session.py
"""
Parking sessions table.
One row per visit: created active on entry, completed on exit (never deleted),
so completed rows feed the history and time-bucketed statistics.
"""

from sqlalchemy import Column, Integer, String, DateTime, Float, Text
from app.database import Base


class ParkingSession(Base):
    __tablename__ = "parking_sessions"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    vehicle_id = Column(String(64))
    zone_id = Column(String(64), index=True)
    slot_id = Column(String(64))
    qr_code_id = Column(String(64))
    entry_time = Column(DateTime, nullable=False, index=True)
    exit_time = Column(DateTime)
    entry_method = Column(String(20), default="qr", nullable=False)
    exit_method = Column(String(20))
    duration_minutes = Column(Integer)          # whole minutes (set on exit)
    base_rate = Column(Float)                   # hourly rate captured at entry
    total_cost = Column(Float)                  # set on exit
    payment_status = Column(String(20), default="pending", nullable=False)
    transaction_id = Column(String(100))
    status = Column(String(20), default="active", nullable=False, index=True)
    notes = Column(Text)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<ParkingSession {self.id} user={self.user_id} status={self.status}>"
