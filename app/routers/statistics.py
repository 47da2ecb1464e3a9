# app/routers/statistics.py
"""Occupancy statistics for the dashboard."""

from fastapi import APIRouter, Depends
from typing import Literal, Optional
from app.dependencies import get_statistics
from app.schemas.parking_slot import SlotStatisticsOut
from app.schemas.parking_session import SessionRecord
from app.schemas.statistics import TimeBucketOut
from app.services.statistics_service import OccupancyStatistics

router = APIRouter()


@router.get("/parking/static", response_model=SlotStatisticsOut, summary="Slot counts per status")
def get_slot_statistics(zoneId: Optional[str] = None, stats: OccupancyStatistics = Depends(get_statistics)):
    return stats.get_slot_statistics(zoneId)


@router.get("/parking/statistics/traffic-flow", response_model=list[TimeBucketOut],
            summary="Time-bucketed occupancy (hour or day mode)")
def get_traffic_flow(
    zoneId: Optional[str] = None,
    dayOfWeek: Optional[str] = None,
    hour: Optional[int] = None,
    filterType: Literal["hour", "day"] = "hour",
    stats: OccupancyStatistics = Depends(get_statistics),
):
    return stats.get_statistics_by_time_range(zone_id=zoneId, day_of_week=dayOfWeek,
                                              hour=hour, filter_type=filterType)


@router.get("/parking/statistics/recent-activity", response_model=list[SessionRecord],
            summary="Most recent sessions, any status")
def get_recent_activity(limit: Optional[int] = None, zoneId: Optional[str] = None,
                        stats: OccupancyStatistics = Depends(get_statistics)):
    return stats.get_recent_activity(limit, zoneId)
