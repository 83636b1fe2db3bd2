# =======================================================================================
# rfid_dashboard/api/routes/live.py - Real-time Event Channel
# =======================================================================================
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from ...services.broadcaster import Broadcaster, Viewer
from ...utils.exceptions import InvalidToken, MissingToken

logger = logging.getLogger(__name__)

router = APIRouter()


async def _pump(websocket: WebSocket, viewer: Viewer) -> None:
    """Forward queued messages to the client until the connection goes away."""
    while True:
        message = await viewer.next_message()
        await websocket.send_json(message)


async def _drain(websocket: WebSocket) -> None:
    """No client messages are defined; read until disconnect so it is noticed."""
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/ws")
async def live_events(websocket: WebSocket, token: Optional[str] = None):
    """Pushes a `new-rfid-log` message for every event stored after connecting."""
    state = websocket.app.state

    if state.config.LIVE_REQUIRE_AUTH:
        try:
            if not token:
                raise MissingToken()
            state.auth_service.verify(token)
        except (MissingToken, InvalidToken) as e:
            logger.info("Live connection rejected: %s", e.message)
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=e.message)
            return

    broadcaster: Broadcaster = state.broadcaster
    client = websocket.client
    label = f"{client.host}:{client.port}" if client else None

    # attach before accepting so nothing published after the handshake is missed
    viewer = broadcaster.attach(label=label)
    try:
        await websocket.accept()
        tasks = [
            asyncio.create_task(_pump(websocket, viewer)),
            asyncio.create_task(_drain(websocket)),
        ]
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            exc = task.exception()
            if exc and not isinstance(exc, WebSocketDisconnect):
                logger.warning("Live connection %s closed with error: %s", viewer.label, exc)
    finally:
        broadcaster.detach(viewer)
