# app/models/pricing_rule.py
"""Pricing tiers: one hourly rate per role."""

from sqlalchemy import Column, Integer, Float
from app.database import Base


class PricingRule(Base):
    __tablename__ = "pricing_rules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    role_id = Column(Integer, nullable=False, index=True)
    rate_per_hour = Column(Float, nullable=False)

    def __repr__(self):
        return f"<PricingRule role={self.role_id} rate={self.rate_per_hour}>"
