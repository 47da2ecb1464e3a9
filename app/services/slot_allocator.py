# app/services/slot_allocator.py
"""
Slot allocation: reservation of a slot for a user's active session, and the
operator / sensor override that forces a slot status.

Slot state machine: available ⇄ reserved ⇄ occupied, available ⇄ maintenance.
toggle_slot_status() does not validate transitions: it is the operator escape
hatch. Forcing "available" over a slot that an active session still points to
leaves that session's slot_id untouched.
"""

from datetime import datetime
from typing import Callable, Optional
from app.exceptions import (
    NoActiveSession, NoAvailableSlots, SessionNotFound, SlotChangeForbidden,
    SlotNotFound, SlotUnavailable, ValidationFailureError, ZoneMismatch, ZoneNotFound,
)
from app.schemas.parking_slot import SlotStatus, ReserveSlotResult
from app.schemas.parking_session import SessionStatus
from app.services.notification_service import emit_safely
from app.services.record_store import ZONES, SLOTS, SESSIONS
from app.services.statistics_service import zone_statistics
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _find(records: list, record_id: Optional[str]):
    if not record_id:
        return None
    return next((r for r in records if r.id == record_id), None)


def find_active_session(sessions: list, user_id: str):
    return next((s for s in sessions if s.user_id == user_id and s.status == SessionStatus.ACTIVE), None)


class SlotAllocator:
    def __init__(self, store, notifier=None, clock: Callable[[], datetime] = datetime.utcnow):
        self.store = store
        self.notifier = notifier
        self.clock = clock

    # ── Reads ─────────────────────────────────────────────────────────────
    def get_all_slots(self, zone_id: Optional[str] = None) -> list:
        slots = self.store.read_all(SLOTS)
        return [s for s in slots if s.zone_id == zone_id] if zone_id else slots

    def get_slot_by_id(self, slot_id: str):
        slot = _find(self.store.read_all(SLOTS), slot_id)
        if not slot:
            raise SlotNotFound(f"Slot with id {slot_id} not found")
        return slot

    def get_all_zones(self) -> list:
        return self.store.read_all(ZONES)

    def get_zone_by_id(self, zone_id: str):
        zone = _find(self.store.read_all(ZONES), zone_id)
        if not zone:
            raise ZoneNotFound(f"Zone with id {zone_id} not found")
        return zone

    # ── Mutations ─────────────────────────────────────────────────────────
    async def reserve_slot(self, user_id: str, zone_id: str, slot_id: Optional[str] = None) -> ReserveSlotResult:
        """Reserve a slot in zone_id for the user's active session, releasing any previous one."""
        async with self.store.locked(SLOTS, SESSIONS):
            slots = self.store.read_all(SLOTS)
            sessions = self.store.read_all(SESSIONS)

            session = find_active_session(sessions, user_id)
            if not session:
                raise NoActiveSession(f"No active parking session found for user {user_id}")

            current = _find(slots, session.slot_id)
            if current and current.status == SlotStatus.OCCUPIED:
                raise SlotChangeForbidden("Cannot change parking slot once the vehicle is already parked")

            if slot_id:
                target = _find(slots, slot_id)
                if not target:
                    raise SlotNotFound(f"Slot {slot_id} not found")
                if target.status != SlotStatus.AVAILABLE:
                    raise SlotUnavailable(f"Slot {slot_id} is not available")
                if target.zone_id != zone_id:
                    raise ZoneMismatch(f"Slot {slot_id} does not belong to zone {zone_id}")
            else:
                target = next((s for s in slots if s.zone_id == zone_id
                               and s.status == SlotStatus.AVAILABLE and s.is_active), None)
                if not target:
                    raise NoAvailableSlots(f"No available slots in zone {zone_id}")

            now = self.clock()
            if current:
                current.status = SlotStatus.AVAILABLE
                current.current_session_id = None
                current.updated_at = now
            target.status = SlotStatus.RESERVED
            target.current_session_id = session.id
            target.updated_at = now

            session.slot_id = target.id
            session.zone_id = zone_id
            session.updated_at = now

            self.store.replace_many({SLOTS: slots, SESSIONS: sessions})
            stats = zone_statistics(slots, zone_id)

        logger.info(f"[RESERVE] user={user_id} slot={target.slot_number} zone={zone_id} "
                    f"(released={current.slot_number if current else None})")
        await emit_safely(self.notifier, "session_update", session)
        await emit_safely(self.notifier, "zone_capacity_alert", zone_id, stats.occupancy_percentage)

        return ReserveSlotResult(
            success=True,
            slotId=target.id,
            sessionId=session.id,
            message=f"Slot {target.slot_number} reserved successfully",
        )

    async def toggle_slot_status(self, slot_id: str, status: SlotStatus, session_id: Optional[str] = None):
        """
        Force a slot status (operator or sensor). When marking a slot occupied for a
        session, the session's slot/zone are repaired to point at this slot.
        """
        try:
            status = SlotStatus(status)
        except ValueError:
            raise ValidationFailureError(f"Unknown slot status: {status!r}") from None
        async with self.store.locked(SLOTS, SESSIONS):
            slots = self.store.read_all(SLOTS)
            slot = _find(slots, slot_id)
            if not slot:
                raise SlotNotFound(f"Slot with id {slot_id} not found")

            now = self.clock()
            changes = {SLOTS: slots}
            if status == SlotStatus.OCCUPIED and session_id:
                sessions = self.store.read_all(SESSIONS)
                session = _find(sessions, session_id)
                if not session:
                    raise SessionNotFound(f"Session with id {session_id} not found")
                if session.slot_id != slot_id:
                    logger.info(f"[TOGGLE] Repairing session {session_id}: slot {session.slot_id} → {slot_id}")
                    session.slot_id = slot_id
                    session.zone_id = slot.zone_id
                    session.updated_at = now
                    changes[SESSIONS] = sessions

            slot.status = status
            if session_id is not None:
                slot.current_session_id = session_id
            slot.updated_at = now
            self.store.replace_many(changes)
            stats = zone_statistics(slots, slot.zone_id)

        logger.info(f"[TOGGLE] slot={slot.slot_number} zone={slot.zone_id} → {slot.status}")
        await emit_safely(self.notifier, "slot_update", slot.zone_id, slot)
        await emit_safely(self.notifier, "zone_capacity_alert", slot.zone_id, stats.occupancy_percentage)
        return slot
