# app/services/identity_service.py
"""
Identity store lookups: users, roles, pricing tiers, vehicles and QR codes.
Read-only for the parking engine apart from update_user().
"""

from typing import Optional
from app.database import SessionLocal
from app.models.user import User
from app.models.role import Role
from app.models.pricing_rule import PricingRule
from app.models.vehicle import Vehicle
from app.models.qr_code import QRCode
from app.schemas.identity import UserOut, RoleOut, PricingRuleOut, VehicleOut, QRCodeOut
from app.utils.logger import get_logger

logger = get_logger(__name__)


class IdentityStore:
    def __init__(self, session_factory=None):
        self._session_factory = session_factory or SessionLocal

    def _first(self, schema, model, *criteria):
        db = self._session_factory()
        try:
            row = db.query(model).filter(*criteria).first()
            return schema.model_validate(row) if row else None
        finally:
            db.close()

    def find_user_by_id(self, user_id: str) -> Optional[UserOut]:
        return self._first(UserOut, User, User.id == user_id)

    def find_user_by_email(self, email: str) -> Optional[UserOut]:
        return self._first(UserOut, User, User.email == email)

    def find_role_by_id(self, role_id: int) -> Optional[RoleOut]:
        return self._first(RoleOut, Role, Role.id == role_id)

    def find_price_role_by_role_id(self, role_id: int) -> Optional[PricingRuleOut]:
        return self._first(PricingRuleOut, PricingRule, PricingRule.role_id == role_id)

    def find_qr_code_by_user_id(self, user_id: str) -> Optional[QRCodeOut]:
        return self._first(QRCodeOut, QRCode, QRCode.user_id == user_id)

    def find_vehicles_by_user_id(self, user_id: str) -> list[VehicleOut]:
        db = self._session_factory()
        try:
            rows = db.query(Vehicle).filter(Vehicle.user_id == user_id).order_by(Vehicle.registered_at, Vehicle.id).all()
            return [VehicleOut.model_validate(r) for r in rows]
        finally:
            db.close()

    def update_user(self, user_id: str, updates: dict) -> None:
        """Apply a partial update. Unknown users are ignored."""
        db = self._session_factory()
        try:
            user = db.query(User).filter(User.id == user_id).first()
            if not user:
                logger.warning(f"[IDENTITY] update_user: user {user_id} not found")
                return
            for key, value in updates.items():
                setattr(user, key, value)
            db.commit()
        finally:
            db.close()

    def resolve_user(self, user_ref: str) -> Optional[UserOut]:
        """Look a user up by id, falling back to email."""
        return self.find_user_by_id(user_ref) or self.find_user_by_email(user_ref)

    def resolve_rate_per_hour(self, user_ref: str) -> Optional[float]:
        """Hourly rate of the user's pricing tier, or None when no tier resolves."""
        user = self.resolve_user(user_ref)
        if not user or user.role_id is None:
            return None
        rule = self.find_price_role_by_role_id(user.role_id)
        return rule.rate_per_hour if rule and rule.rate_per_hour else None
