"""WebSocket endpoint: streams search progress to UI clients."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from celestial_hexagon.services.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


def create_progress_router(manager: ConnectionManager) -> APIRouter:
    """Factory binding /ws/progress to a ConnectionManager."""

    router = APIRouter()

    @router.websocket("/ws/progress")
    async def stream_progress(websocket: WebSocket) -> None:
        """Clients connect here to receive every SearchProgress update."""
        await manager.connect(websocket)
        logger.info("Progress client connected — total: %d", manager.active_count)

        try:
            while True:
                # Keep the connection alive; progress is pushed server-side
                await websocket.receive_text()
        except WebSocketDisconnect:
            manager.disconnect(websocket)
            logger.info("Progress client disconnected — total: %d", manager.active_count)

    return router
