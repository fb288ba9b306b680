"""REST endpoints for catalog sessions.

Paths:
    POST /api/sessions              upload a CSV catalog
    GET  /api/sessions              list sessions
    GET  /api/sessions/{id}         one session summary

Uploading parses the catalog through the adapter registry, drops rows
no adapter accepts, and registers the sorted events as a new session.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from celestial_hexagon.adapters.catalog import load_catalog
from celestial_hexagon.adapters.registry import AdapterRegistry
from celestial_hexagon.domain.session import AnalysisSession
from celestial_hexagon.store.session_store import SessionNotFoundError, SessionStore

logger = logging.getLogger(__name__)


class CatalogUpload(BaseModel):
    csv_text: str = Field(..., min_length=1, description="Catalog rows: date, kind, category")


async def require_session(store: SessionStore, session_id: UUID) -> AnalysisSession:
    """Fetch a session or raise HTTP 404."""
    try:
        return await store.require(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def create_sessions_router(store: SessionStore, registry: AdapterRegistry) -> APIRouter:
    """Factory that wires the session endpoints to a store and adapter registry."""

    router = APIRouter(prefix="/api", tags=["sessions"])

    @router.post("/sessions", status_code=201)
    async def upload_catalog(upload: CatalogUpload) -> dict[str, Any]:
        await store.expire_stale()

        report = load_catalog(upload.csv_text, registry)
        if report.event_count == 0:
            raise HTTPException(
                status_code=400,
                detail=f"No usable eclipse rows ({report.skipped_rows} skipped)",
            )

        session = await store.create(report.events, skipped_rows=report.skipped_rows)
        return {
            "status": "accepted",
            "session_id": str(session.session_id),
            "event_count": session.event_count,
            "skipped_rows": session.skipped_rows,
        }

    @router.get("/sessions")
    async def list_sessions() -> dict[str, Any]:
        sessions = [s.summary() for s in await store.list_sessions()]
        return {"sessions": sessions, "count": len(sessions)}

    @router.get("/sessions/{session_id}")
    async def get_session(session_id: UUID) -> dict[str, Any]:
        session = await require_session(store, session_id)
        return session.summary()

    return router
