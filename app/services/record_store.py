# app/services/record_store.py
"""
Record store adapter: whole-collection access to zones, slots and sessions.

Callers read a full collection, mutate it in memory, and write the full
collection back. Each collection has its own asyncio.Lock; every
read-modify-write must run inside `locked(...)` so no other mutation of the
same collection can interleave between the read and the write.

read_all() always returns fresh pydantic copies, so in-memory edits are
invisible to other readers until replace_all() or replace_many() commits
them. Mutations touching slots and sessions write both through replace_many().
"""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from app.database import SessionLocal
from app.exceptions import RecordStoreError
from app.models.parking_zone import ParkingZone
from app.models.parking_slot import ParkingSlot
from app.models.parking_session import ParkingSession
from app.schemas.parking_zone import ZoneRecord
from app.schemas.parking_slot import SlotRecord
from app.schemas.parking_session import SessionRecord
from app.utils.logger import get_logger

logger = get_logger(__name__)

ZONES = "zones"
SLOTS = "slots"
SESSIONS = "sessions"

COLLECTIONS = {
    ZONES: (ParkingZone, ZoneRecord),
    SLOTS: (ParkingSlot, SlotRecord),
    SESSIONS: (ParkingSession, SessionRecord),
}

# Locks are always taken in this order
LOCK_ORDER = (ZONES, SLOTS, SESSIONS)


class RecordStore:
    def __init__(self, session_factory=None):
        self._session_factory = session_factory or SessionLocal
        self._locks = {name: asyncio.Lock() for name in LOCK_ORDER}

    @staticmethod
    def _resolve(collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}") from None

    def read_all(self, collection: str) -> list:
        """Return every record of a collection, in stored order."""
        model, record_cls = self._resolve(collection)
        db = self._session_factory()
        try:
            rows = db.query(model).order_by(model.position).all()
            return [record_cls.model_validate(row) for row in rows]
        finally:
            db.close()

    def replace_all(self, collection: str, records: list) -> None:
        """
        Replace a whole collection in one DB transaction.
        All-or-nothing: on any failure the previous contents are kept.
        """
        self.replace_many({collection: records})

    def replace_many(self, changes: dict) -> None:
        """
        Replace several collections in a single DB transaction, e.g.
        {SLOTS: slots, SESSIONS: sessions}. Either every collection is
        written or none is.
        """
        resolved = [(name, self._resolve(name)[0], records) for name, records in changes.items()]
        names = ", ".join(changes)
        db = self._session_factory()
        try:
            for _, model, records in resolved:
                db.query(model).delete()
                db.add_all([model(position=i, **r.model_dump()) for i, r in enumerate(records)])
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[STORE] write of {names} failed, rolled back: {e}")
            raise RecordStoreError(f"Failed to write collections: {names}") from e
        finally:
            db.close()
        for name, _, records in resolved:
            logger.debug(f"[STORE] {name}: {len(records)} records written")

    @asynccontextmanager
    async def locked(self, *collections: str):
        """Hold the locks of the given collections for the duration of the block."""
        for name in collections:
            self._resolve(name)
        async with AsyncExitStack() as stack:
            for name in LOCK_ORDER:
                if name in collections:
                    await stack.enter_async_context(self._locks[name])
            yield self
