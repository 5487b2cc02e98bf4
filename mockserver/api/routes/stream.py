"""WebSocket push channel announcing server metadata to new clients."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from mockserver.api.dependencies import get_connection_hub, get_session_registry
from mockserver.core.request_context import request_context
from mockserver.schemas import ServerInfoResponse
from mockserver.services.connection_hub import SERVER_INFO_EVENT, ConnectionHub
from mockserver.services.session_registry import SessionRegistry

router = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def server_events(
    websocket: WebSocket,
    hub: ConnectionHub = Depends(get_connection_hub),
    sessions: SessionRegistry = Depends(get_session_registry),
) -> None:
    """
    Push a ``server:info`` snapshot on connect, then hold the socket open.

    Payload schema:
      {
        "event": "server:info",
        "data": <same body as GET /api/server/info>,
      }
    """
    if hub.is_shutdown():
        await websocket.close(code=1001)
        return

    subscriber = await hub.subscribe(websocket)
    with request_context(f"ws:{subscriber.id}"):
        try:
            info = ServerInfoResponse.from_info(await sessions.get_info())
            await hub.send(subscriber, SERVER_INFO_EVENT, info.model_dump(mode="json", by_alias=True))
            while not hub.is_shutdown():
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
        except WebSocketDisconnect:
            pass
        finally:
            await hub.unsubscribe(subscriber)
