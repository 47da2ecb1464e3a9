# app/routers/slots.py
"""Parking slots: listing, reservation and operator status override."""

from fastapi import APIRouter, Depends
from typing import Optional
from app.dependencies import get_slot_allocator
from app.schemas.parking_slot import (
    SlotRecord, ReserveSlotRequest, ReserveSlotResult, ToggleSlotStatusRequest,
)
from app.services.slot_allocator import SlotAllocator

router = APIRouter()


@router.get("/parking/slots", response_model=list[SlotRecord], summary="List slots, optionally by zone")
def get_all_slots(zoneId: Optional[str] = None, allocator: SlotAllocator = Depends(get_slot_allocator)):
    return allocator.get_all_slots(zoneId)


@router.get("/parking/slots/{slot_id}", response_model=SlotRecord, summary="Get one slot")
def get_slot_by_id(slot_id: str, allocator: SlotAllocator = Depends(get_slot_allocator)):
    return allocator.get_slot_by_id(slot_id)


@router.post("/parking/reserve", response_model=ReserveSlotResult, summary="Reserve a slot for the active session")
async def reserve_slot(body: ReserveSlotRequest, allocator: SlotAllocator = Depends(get_slot_allocator)):
    """Picks the first available slot of the zone unless slotId is given."""
    return await allocator.reserve_slot(body.userId, body.zoneId, body.slotId)


@router.post("/parking/toggle-status", response_model=SlotRecord, summary="Force a slot status (operator/sensor)")
async def toggle_slot_status(body: ToggleSlotStatusRequest, allocator: SlotAllocator = Depends(get_slot_allocator)):
    return await allocator.toggle_slot_status(body.slotId, body.status, body.sessionId)
