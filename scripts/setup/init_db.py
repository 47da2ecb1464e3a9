# scripts/setup/init_db.py
"""
Initialize database: creates all tables and seeds demo zones, slots and users.
Run once before first launch. Re-running leaves existing data untouched.
Usage: python scripts/setup/init_db.py [--zones 3] [--slots-per-zone 20]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import argparse
from datetime import datetime
from app.database import create_tables, engine, SessionLocal
from app.config import settings
from app.models.user import User
from app.models.role import Role
from app.models.pricing_rule import PricingRule
from app.models.vehicle import Vehicle
from app.models.qr_code import QRCode
from app.schemas.parking_zone import ZoneRecord
from app.schemas.parking_slot import SlotRecord
from app.services.record_store import RecordStore, ZONES, SLOTS
from sqlalchemy import text

ROLES = [(1, "student", 0.25), (2, "staff", 0.50), (3, "visitor", 1.00)]


def seed_identity(now):
    db = SessionLocal()
    try:
        if db.query(Role).count():
            print("   ↷ identity data already present")
            return
        for role_id, name, rate in ROLES:
            db.add(Role(id=role_id, name=name))
            db.add(PricingRule(role_id=role_id, rate_per_hour=rate))
        db.add(User(id="user-demo", email="demo@campus.edu", full_name="Demo Student",
                    institutional_id="A00000001", role_id=1, created_at=now))
        db.add(Vehicle(id="veh-demo", user_id="user-demo", plate_number="DEMO-001",
                       make="Toyota", model="Corolla", color="white", registered_at=now))
        db.add(QRCode(id="qr-demo", user_id="user-demo", qr_value="QR-A00000001-demo", created_at=now))
        db.commit()
        print(f"   ✓ {len(ROLES)} roles, 1 demo user")
    finally:
        db.close()


def seed_parking(store, zone_count, slots_per_zone, now):
    if store.read_all(ZONES):
        print("   ↷ parking zones already present")
        return
    zones, slots = [], []
    for z in range(zone_count):
        code = chr(ord("A") + z)
        zone_id = f"zone-{code.lower()}"
        zones.append(ZoneRecord(id=zone_id, code=code, name=f"Zone {code}",
                                total_capacity=slots_per_zone, created_at=now, updated_at=now))
        for n in range(1, slots_per_zone + 1):
            slots.append(SlotRecord(id=f"{zone_id}-{n:03d}", zone_id=zone_id, slot_number=f"{code}-{n:03d}",
                                    created_at=now, updated_at=now))
    store.replace_all(ZONES, zones)
    store.replace_all(SLOTS, slots)
    print(f"   ✓ {len(zones)} zones, {len(slots)} slots")


def main():
    parser = argparse.ArgumentParser(description="Create tables and seed demo data")
    parser.add_argument("--zones", type=int, default=3)
    parser.add_argument("--slots-per-zone", type=int, default=20)
    args = parser.parse_args()

    print("🗄️  Parking DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    print("✅ All tables created")

    print("\n🌱 Seeding demo data...")
    now = datetime.utcnow()
    seed_identity(now)
    seed_parking(RecordStore(), args.zones, args.slots_per_zone, now)

    print("\n🎉 Database ready! You can now start the backend:")
    print("   uvicorn app.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
