# app/models/vehicle.py
"""
Registered vehicles table (identity store).
The first vehicle on file for a user is attached to each new parking session.
"""

from sqlalchemy import Column, String, DateTime
from app.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    plate_number = Column(String(50), unique=True, nullable=False, index=True)
    make = Column(String(100))
    model = Column(String(100))
    color = Column(String(50))
    registered_at = Column(DateTime)

    def __repr__(self):
        return f"<Vehicle {self.plate_number} user={self.user_id}>"
