# tests/test_identity_service.py
"""Unit tests for identity store lookups."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime
from app.models.role import Role


class TestIdentityStore:
    def test_user_lookups(self, identity):
        assert identity.find_user_by_id("U1").email == "u1@campus.edu"
        assert identity.find_user_by_email("u2@campus.edu").id == "U2"
        assert identity.find_user_by_id("nope") is None
        assert identity.resolve_user("u1@campus.edu").id == "U1"

    def test_role_and_pricing(self, identity, session_factory):
        db = session_factory()
        db.add(Role(id=2, name="staff"))
        db.commit()
        db.close()
        assert identity.find_role_by_id(2).name == "staff"
        assert identity.find_price_role_by_role_id(2).rate_per_hour == 2.0
        assert identity.resolve_rate_per_hour("U1") == 2.0
        assert identity.resolve_rate_per_hour("U2") is None
        assert identity.resolve_rate_per_hour("ghost") is None

    def test_vehicles_in_registration_order(self, identity):
        assert [v.id for v in identity.find_vehicles_by_user_id("U1")] == ["V1", "V2"]
        assert identity.find_vehicles_by_user_id("U2") == []

    def test_qr_code(self, identity):
        assert identity.find_qr_code_by_user_id("U1").qr_value == "QR-U1"
        assert identity.find_qr_code_by_user_id("U2") is None

    def test_update_user(self, identity):
        seen = datetime(2026, 10, 21, 8, 0)
        identity.update_user("U1", {"last_login_at": seen})
        identity.update_user("ghost", {"last_login_at": seen})
        assert identity.find_user_by_id("U1").last_login_at == seen
