# app/services/session_service.py
"""
Parking session lifecycle: (none) → active → completed.

- start_parking_session() is idempotent per user: a second call while a session
  is active updates its zone/slot (when given) instead of opening another one.
- end_parking_session() computes whole-minute duration and cost, frees the slot,
  and closes the session. Completed sessions are terminal and kept for history.

base_rate is captured from the user's pricing tier at entry and is the rate
charged at exit. The live tier is only consulted for sessions stored without a
rate.
"""

import math
import uuid
from datetime import datetime
from typing import Callable, Optional
from app.config import settings
from app.exceptions import SessionNotActive, SessionNotFound
from app.schemas.parking_slot import SlotStatus
from app.schemas.parking_session import (
    SessionRecord, SessionStatus, PaymentStatus, EndSessionResult,
)
from app.services.notification_service import emit_safely
from app.services.record_store import SLOTS, SESSIONS
from app.services.slot_allocator import find_active_session
from app.utils.logger import get_logger

logger = get_logger(__name__)


def duration_in_minutes(entry_time: datetime, exit_time: datetime) -> int:
    """Whole minutes between entry and exit, truncated toward zero."""
    return math.trunc((exit_time - entry_time).total_seconds() / 60)


def compute_cost(duration_minutes: int, base_rate: float) -> float:
    return (duration_minutes / 60) * base_rate


class SessionLifecycleManager:
    def __init__(self, store, identity, notifier=None, clock: Callable[[], datetime] = datetime.utcnow):
        self.store = store
        self.identity = identity
        self.notifier = notifier
        self.clock = clock

    def get_active_session(self, user_id: str) -> Optional[SessionRecord]:
        return find_active_session(self.store.read_all(SESSIONS), user_id)

    def _rate_for(self, user_id: str) -> float:
        return self.identity.resolve_rate_per_hour(user_id) or settings.DEFAULT_RATE_PER_HOUR

    async def start_parking_session(self, user_id: str, qr_code_id: Optional[str] = None,
                                    zone_id: Optional[str] = None, slot_id: Optional[str] = None,
                                    entry_method: Optional[str] = None) -> SessionRecord:
        async with self.store.locked(SESSIONS):
            sessions = self.store.read_all(SESSIONS)
            session = find_active_session(sessions, user_id)

            if session and not (slot_id or zone_id):
                logger.debug(f"[SESSION] user={user_id} already has active session {session.id}")
                return session

            now = self.clock()
            if session:
                if slot_id:
                    session.slot_id = slot_id
                    if not zone_id:
                        slot = next((s for s in self.store.read_all(SLOTS) if s.id == slot_id), None)
                        if slot:
                            session.zone_id = slot.zone_id
                if zone_id:
                    session.zone_id = zone_id
                session.updated_at = now
                logger.info(f"[SESSION] Updated {session.id}: zone={session.zone_id} slot={session.slot_id}")
            else:
                vehicles = self.identity.find_vehicles_by_user_id(user_id)
                if not qr_code_id:
                    qr_code = self.identity.find_qr_code_by_user_id(user_id)
                    qr_code_id = qr_code.id if qr_code else None
                session = SessionRecord(
                    id=str(uuid.uuid4()),
                    user_id=user_id,
                    vehicle_id=vehicles[0].id if vehicles else None,
                    zone_id=zone_id,
                    slot_id=slot_id,
                    qr_code_id=qr_code_id,
                    entry_time=now,
                    entry_method=entry_method or "qr",
                    base_rate=self._rate_for(user_id),
                    payment_status=PaymentStatus.PENDING,
                    status=SessionStatus.ACTIVE,
                    created_at=now,
                    updated_at=now,
                )
                sessions.append(session)
                logger.info(f"[SESSION] Started {session.id} user={user_id} rate={session.base_rate}/h")

            self.store.replace_all(SESSIONS, sessions)

        await emit_safely(self.notifier, "session_update", session)
        return session

    async def end_parking_session(self, session_id: str, exit_method: Optional[str] = None) -> EndSessionResult:
        released = None
        async with self.store.locked(SLOTS, SESSIONS):
            sessions = self.store.read_all(SESSIONS)
            session = next((s for s in sessions if s.id == session_id), None)
            if not session:
                raise SessionNotFound(f"Session with id {session_id} not found")
            if session.status != SessionStatus.ACTIVE:
                raise SessionNotActive(f"Session {session_id} is not active")

            exit_time = self.clock()
            minutes = duration_in_minutes(session.entry_time, exit_time)
            base_rate = session.base_rate or self._rate_for(session.user_id)
            total_cost = compute_cost(minutes, base_rate)

            changes = {SESSIONS: sessions}
            if session.slot_id:
                slots = self.store.read_all(SLOTS)
                slot = next((s for s in slots if s.id == session.slot_id), None)
                if slot and slot.status in (SlotStatus.OCCUPIED, SlotStatus.RESERVED):
                    slot.status = SlotStatus.AVAILABLE
                    slot.current_session_id = None
                    slot.updated_at = exit_time
                    changes[SLOTS] = slots
                    released = slot

            session.exit_time = exit_time
            session.exit_method = exit_method or "qr"
            session.duration_minutes = minutes
            session.total_cost = total_cost
            session.payment_status = PaymentStatus.COMPLETED
            session.status = SessionStatus.COMPLETED
            session.updated_at = exit_time
            self.store.replace_many(changes)

        logger.info(f"[SESSION] Ended {session_id}: {minutes} min × {base_rate}/h = {total_cost:.2f}")
        if released:
            await emit_safely(self.notifier, "slot_update", released.zone_id, released)
        await emit_safely(self.notifier, "session_update", session)

        return EndSessionResult(session=session, duration_minutes=minutes, total_cost=total_cost)
