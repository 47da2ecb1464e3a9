# app/routers/zones.py
"""Parking zones (read-only)."""

from fastapi import APIRouter, Depends
from app.dependencies import get_slot_allocator, get_statistics
from app.schemas.parking_slot import ZoneStatisticsOut
from app.schemas.parking_zone import ZoneRecord
from app.services.slot_allocator import SlotAllocator
from app.services.statistics_service import OccupancyStatistics

router = APIRouter()


@router.get("/parking/zones", response_model=list[ZoneRecord], summary="List parking zones")
def get_all_zones(allocator: SlotAllocator = Depends(get_slot_allocator)):
    return allocator.get_all_zones()


@router.get("/parking/zones/{zone_id}", response_model=ZoneRecord, summary="Get one zone")
def get_zone_by_id(zone_id: str, allocator: SlotAllocator = Depends(get_slot_allocator)):
    return allocator.get_zone_by_id(zone_id)


@router.get("/parking/zones/{zone_id}/statistics", response_model=ZoneStatisticsOut,
            summary="Slot counts and occupancy of one zone")
def get_zone_statistics(zone_id: str, stats: OccupancyStatistics = Depends(get_statistics)):
    return stats.get_zone_statistics(zone_id)
