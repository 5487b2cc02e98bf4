"""WebSocket subscriber bookkeeping for server push events."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)

SERVER_INFO_EVENT = "server:info"
GOING_AWAY = 1001


@dataclass(eq=False)
class Subscriber:
    websocket: WebSocket
    id: str = field(default_factory=lambda: uuid4().hex[:12])
    __hash__ = object.__hash__


class ConnectionHub:
    """Track connected WebSocket clients and push events to them."""

    def __init__(self) -> None:
        self._subscribers: set[Subscriber] = set()
        self._lock = asyncio.Lock()
        self._shutdown_event = asyncio.Event()

    def is_shutdown(self) -> bool:
        return self._shutdown_event.is_set()

    def reset(self) -> None:
        self._shutdown_event.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def subscribe(self, websocket: WebSocket) -> Subscriber:
        await websocket.accept()
        subscriber = Subscriber(websocket=websocket)
        async with self._lock:
            self._subscribers.add(subscriber)
        logger.info("Client connected: %s", subscriber.id)
        return subscriber

    async def unsubscribe(self, subscriber: Subscriber) -> None:
        async with self._lock:
            if subscriber not in self._subscribers:
                return
            self._subscribers.discard(subscriber)
        logger.info("Client disconnected: %s", subscriber.id)

    async def send(self, subscriber: Subscriber, event: str, data: dict[str, Any]) -> None:
        await subscriber.websocket.send_json({"event": event, "data": data})

    async def shutdown(self) -> None:
        self._shutdown_event.set()
        async with self._lock:
            subscribers = list(self._subscribers)
            self._subscribers.clear()
        for sub in subscribers:
            if sub.websocket.application_state != WebSocketState.CONNECTED:
                continue
            try:
                await sub.websocket.close(code=GOING_AWAY)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Closing client %s failed: %s", sub.id, exc)
        if subscribers:
            logger.info("Closed %s WebSocket client(s)", len(subscribers))
