# app/routers/sessions.py
"""Parking sessions: start, end, active lookup and history."""

from fastapi import APIRouter, Depends
from typing import Optional
from app.dependencies import get_session_manager, get_statistics
from app.schemas.parking_session import (
    SessionRecord, StartSessionRequest, EndSessionRequest, EndSessionResult,
)
from app.services.session_service import SessionLifecycleManager
from app.services.statistics_service import OccupancyStatistics

router = APIRouter()


@router.post("/parking/sessions/start", response_model=SessionRecord, summary="Start (or update) a parking session")
async def start_session(body: StartSessionRequest, manager: SessionLifecycleManager = Depends(get_session_manager)):
    """Idempotent per user: an active session is updated/returned instead of duplicated."""
    return await manager.start_parking_session(
        body.user_id, body.qr_code_id, body.zoneId, body.slotId, body.entry_method,
    )


@router.post("/parking/sessions/end", response_model=EndSessionResult, summary="End a parking session")
async def end_session(body: EndSessionRequest, manager: SessionLifecycleManager = Depends(get_session_manager)):
    return await manager.end_parking_session(body.session_id, body.exit_method)


@router.get("/parking/sessions/active/{user_id}", response_model=Optional[SessionRecord],
            summary="Active session of a user (null if none)")
def get_active_session(user_id: str, manager: SessionLifecycleManager = Depends(get_session_manager)):
    return manager.get_active_session(user_id)


@router.get("/parking/sessions/history", response_model=list[SessionRecord], summary="Session history, filterable")
def get_session_history(
    zoneId: Optional[str] = None,
    userId: Optional[str] = None,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    status: Optional[str] = None,
    stats: OccupancyStatistics = Depends(get_statistics),
):
    """Newest entry first. startDate/endDate are inclusive bounds on entry_time."""
    return stats.get_session_history(zone_id=zoneId, user_id=userId, start_date=startDate,
                                     end_date=endDate, status=status)
