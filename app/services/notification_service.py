# app/services/notification_service.py
"""
Real-time notification fan-out over WebSocket.

Every connection joins the global group "parking-updates"; clients join
"zone-<zoneId>" groups with a subscribe-zone message. The engine only calls
session_update / slot_update / zone_capacity_alert; routing is decided here.

The notifier is optional for the engine: services hold `notifier=None` in
deployments without real-time clients, and call it through emit_safely() so a
failed broadcast never fails the mutation that triggered it.
"""

from datetime import datetime
from typing import Optional
from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

GLOBAL_GROUP = "parking-updates"


def zone_group(zone_id: str) -> str:
    return f"zone-{zone_id}"


def capacity_alert_severity(occupancy_percentage: float) -> Optional[str]:
    """Return "high" / "medium" when the zone is above the alert threshold, else None."""
    if occupancy_percentage < settings.CAPACITY_ALERT_THRESHOLD:
        return None
    return "high" if occupancy_percentage >= settings.CAPACITY_ALERT_HIGH_THRESHOLD else "medium"


def _serialize(record):
    return record.model_dump(mode="json") if hasattr(record, "model_dump") else record


class ParkingNotifier:
    def __init__(self):
        self._groups: dict[str, set] = {}

    # ── Subscriptions ─────────────────────────────────────────────────────
    async def connect(self, client):
        await client.accept()
        self.join(client, GLOBAL_GROUP)
        logger.info(f"[WS] Client connected ({self.connection_count} total)")

    def disconnect(self, client):
        for members in self._groups.values():
            members.discard(client)
        logger.info("[WS] Client disconnected")

    def join(self, client, group: str):
        self._groups.setdefault(group, set()).add(client)

    def leave(self, client, group: str):
        self._groups.get(group, set()).discard(client)

    def subscribe_zone(self, client, zone_id: str):
        self.join(client, zone_group(zone_id))
        logger.info(f"[WS] Client subscribed to zone {zone_id}")

    def unsubscribe_zone(self, client, zone_id: str):
        self.leave(client, zone_group(zone_id))
        logger.info(f"[WS] Client unsubscribed from zone {zone_id}")

    def members(self, group: str) -> set:
        return set(self._groups.get(group, set()))

    @property
    def connection_count(self) -> int:
        return len(self._groups.get(GLOBAL_GROUP, set()))

    # ── Broadcast ─────────────────────────────────────────────────────────
    async def broadcast(self, group: str, event: str, payload: dict):
        """Send to every member of a group. Dead clients are dropped, not raised."""
        for client in self.members(group):
            try:
                await client.send_json({"event": event, "data": payload})
            except Exception as e:
                logger.warning(f"[WS] Dropping client from {group}: {e}")
                self.disconnect(client)

    # ── Engine events ─────────────────────────────────────────────────────
    async def session_update(self, session):
        if not session.zone_id:
            return
        await self.broadcast(zone_group(session.zone_id), "session-update", {
            "zoneId": session.zone_id,
            "session": _serialize(session),
            "timestamp": datetime.utcnow().isoformat(),
        })

    async def slot_update(self, zone_id: str, slot):
        await self.broadcast(zone_group(zone_id), "slot-update", {
            "zoneId": zone_id,
            "slot": _serialize(slot),
            "timestamp": datetime.utcnow().isoformat(),
        })

    async def zone_capacity_alert(self, zone_id: str, occupancy_percentage: int):
        severity = capacity_alert_severity(occupancy_percentage)
        if severity is None:
            return
        timestamp = datetime.utcnow().isoformat()
        logger.warning(f"[ALERT][CAPACITY] Zone {zone_id} at {occupancy_percentage}% ({severity})")
        await self.broadcast(zone_group(zone_id), "zone-capacity-alert", {
            "zoneId": zone_id,
            "occupancyPercentage": occupancy_percentage,
            "message": f"Zone {zone_id} is {occupancy_percentage}% full. Consider alternative zones.",
            "severity": severity,
            "timestamp": timestamp,
        })
        await self.broadcast(GLOBAL_GROUP, "capacity-alert", {
            "zoneId": zone_id,
            "occupancyPercentage": occupancy_percentage,
            "message": f"Zone {zone_id} is {occupancy_percentage}% full.",
            "severity": severity,
            "timestamp": timestamp,
        })


async def emit_safely(notifier, event: str, *args):
    """Fire-and-forget call into the optional notifier. Never raises."""
    if notifier is None:
        return
    try:
        await getattr(notifier, event)(*args)
    except Exception as e:
        logger.error(f"[NOTIFY] {event} failed: {e}", exc_info=True)
