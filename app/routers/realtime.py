# app/routers/realtime.py
"""
WebSocket endpoint for real-time parking updates.
Clients send {"event": "subscribe-zone" | "unsubscribe-zone", "data": "<zoneId>"}.
Anything else is ignored. A connection leaves every group when the handler
exits, whatever the reason.
"""

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from app.dependencies import get_notifier
from app.services.notification_service import ParkingNotifier
from app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.websocket("/ws/parking")
async def parking_updates(websocket: WebSocket, notifier: ParkingNotifier = Depends(get_notifier)):
    await notifier.connect(websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                logger.debug("[WS] Ignoring message that is not valid JSON")
                continue
            if not isinstance(message, dict):
                logger.debug(f"[WS] Ignoring non-object message: {type(message).__name__}")
                continue
            event, zone_id = message.get("event"), message.get("data")
            if not zone_id:
                continue
            if event == "subscribe-zone":
                notifier.subscribe_zone(websocket, str(zone_id))
            elif event == "unsubscribe-zone":
                notifier.unsubscribe_zone(websocket, str(zone_id))
            else:
                logger.debug(f"[WS] Ignoring unknown message: {event}")
    except WebSocketDisconnect:
        pass
    finally:
        notifier.disconnect(websocket)
