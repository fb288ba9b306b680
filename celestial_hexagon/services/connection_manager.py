"""Manages WebSocket clients that follow search progress."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import WebSocket

from celestial_hexagon.domain.search import SearchProgress

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks progress subscribers and fans out JSON payloads to them."""

    def __init__(self) -> None:
        self._connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.append(websocket)

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self._connections:
            self._connections.remove(websocket)

    @property
    def active_count(self) -> int:
        return len(self._connections)

    async def broadcast_json(self, data: dict[str, Any]) -> None:
        """Send a JSON payload to every subscriber; drop the ones that fail."""
        for ws in list(self._connections):
            try:
                await ws.send_json(data)
            except Exception as exc:
                logger.info("Dropping progress subscriber: %s", exc)
                self.disconnect(ws)

    async def broadcast_progress(self, session_id: UUID, progress: SearchProgress) -> None:
        if not self._connections:
            return
        payload = {"session_id": str(session_id)}
        payload.update(progress.model_dump(mode="json"))
        await self.broadcast_json(payload)
