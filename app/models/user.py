# app/models/user.py
"""Users table (identity store). Read by the session lifecycle for pricing and vehicle lookup."""

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    email = Column(String(200), unique=True, nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    institutional_id = Column(String(100), unique=True)
    role_id = Column(Integer, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login_at = Column(DateTime)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<User {self.email} role={self.role_id}>"
