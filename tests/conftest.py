# tests/conftest.py
"""Shared fixtures: an in-memory SQLite record store, identity store and a controllable clock."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from contextlib import contextmanager
from datetime import datetime
from unittest.mock import AsyncMock
from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.database import create_tables
from app.models.parking_session import ParkingSession
from app.models.user import User
from app.models.pricing_rule import PricingRule
from app.models.vehicle import Vehicle
from app.models.qr_code import QRCode
from app.schemas.parking_zone import ZoneRecord
from app.schemas.parking_slot import SlotRecord
from app.services.identity_service import IdentityStore
from app.services.record_store import RecordStore, ZONES, SLOTS

# Wednesday
NOW = datetime(2026, 10, 21, 15, 30, 0)


class FakeClock:
    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def session_factory():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return RecordStore(session_factory)


@contextmanager
def failing_session_writes():
    """Inside the block every insert into the sessions table fails, as on a full disk."""
    def fail(mapper, connection, target):
        raise OperationalError("INSERT INTO parking_sessions", {}, Exception("disk I/O error"))

    event.listen(ParkingSession, "before_insert", fail)
    try:
        yield
    finally:
        event.remove(ParkingSession, "before_insert", fail)


@pytest.fixture
def identity(session_factory):
    db = session_factory()
    db.add(User(id="U1", email="u1@campus.edu", full_name="User One", role_id=2))
    db.add(User(id="U2", email="u2@campus.edu", full_name="User Two", role_id=9))   # no pricing tier
    db.add(PricingRule(role_id=2, rate_per_hour=2.0))
    db.add(Vehicle(id="V1", user_id="U1", plate_number="ABC-1234", registered_at=datetime(2025, 1, 1)))
    db.add(Vehicle(id="V2", user_id="U1", plate_number="XYZ-5678", registered_at=datetime(2025, 6, 1)))
    db.add(QRCode(id="QR1", user_id="U1", qr_value="QR-U1"))
    db.commit()
    db.close()
    return IdentityStore(session_factory)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return AsyncMock()


def seed_zone(store, zone_id="Z1", statuses=("available",) * 4, extra_zones=()):
    """Write one zone with a slot per status (S1..Sn), plus any extra (zone_id, statuses) pairs."""
    zones, slots = [], []
    for zid, stats in ((zone_id, statuses), *extra_zones):
        zones.append(ZoneRecord(id=zid, code=zid, name=f"Zone {zid}", total_capacity=len(stats)))
        prefix = "S" if zid == zone_id else f"{zid}-S"
        for i, status in enumerate(stats, start=1):
            slots.append(SlotRecord(id=f"{prefix}{i}", zone_id=zid, slot_number=f"{zid}-{i:02d}", status=status))
    store.replace_all(ZONES, zones)
    store.replace_all(SLOTS, slots)
