# app/dependencies.py
"""
Process-wide engine components, exposed as FastAPI dependencies.
One RecordStore per process so every request shares the same collection locks.
Tests swap these out with app.dependency_overrides.
"""

from functools import lru_cache
from app.services.identity_service import IdentityStore
from app.services.notification_service import ParkingNotifier
from app.services.record_store import RecordStore
from app.services.session_service import SessionLifecycleManager
from app.services.slot_allocator import SlotAllocator
from app.services.statistics_service import OccupancyStatistics


@lru_cache
def get_record_store() -> RecordStore:
    return RecordStore()


@lru_cache
def get_identity_store() -> IdentityStore:
    return IdentityStore()


@lru_cache
def get_notifier() -> ParkingNotifier:
    return ParkingNotifier()


def get_slot_allocator() -> SlotAllocator:
    return SlotAllocator(get_record_store(), get_notifier())


def get_session_manager() -> SessionLifecycleManager:
    return SessionLifecycleManager(get_record_store(), get_identity_store(), get_notifier())


def get_statistics() -> OccupancyStatistics:
    return OccupancyStatistics(get_record_store())
