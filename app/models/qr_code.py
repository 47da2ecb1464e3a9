# app/models/qr_code.py
from sqlalchemy import Column, String, DateTime, Boolean
from app.database import Base


class QRCode(Base):
    __tablename__ = "qr_codes"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    qr_value = Column(String(200), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<QRCode {self.qr_value} user={self.user_id}>"
