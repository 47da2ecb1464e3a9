# app/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy; SQLite by default, PostgreSQL via DATABASE_URL.
All models are auto-imported here so create_tables() creates every table in one call.
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings


def build_engine(url: str):
    """Create an engine for the given URL with backend-appropriate options."""
    if url.startswith("sqlite"):
        # Ensure the folder of a file-based SQLite DB exists
        path = make_url(url).database
        if path and path != ":memory:" and os.path.dirname(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)
        return create_engine(url, connect_args={"check_same_thread": False}, echo=False)
    return create_engine(
        url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=10,
        max_overflow=20,
        echo=False,                  # Set True to log all SQL queries (debug only)
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency: yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    # Record store collections
    from app.models.parking_zone import ParkingZone        # noqa
    from app.models.parking_slot import ParkingSlot        # noqa
    from app.models.parking_session import ParkingSession  # noqa
    # Identity store
    from app.models.user import User                       # noqa
    from app.models.role import Role                       # noqa
    from app.models.pricing_rule import PricingRule        # noqa
    from app.models.vehicle import Vehicle                 # noqa
    from app.models.qr_code import QRCode                  # noqa

    Base.metadata.create_all(bind=bind or engine)
