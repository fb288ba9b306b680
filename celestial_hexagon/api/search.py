"""REST endpoints for running the pattern search and reading its results.

Paths:
    POST /api/sessions/{id}/search            start (or restart) a run
    GET  /api/sessions/{id}/progress          state + percent
    GET  /api/sessions/{id}/patterns          results (?rank=center|score)
    GET  /api/sessions/{id}/patterns/{index}  one pattern with its timeline
    GET  /api/sessions/{id}/export.csv        CSV download

Runs execute as background tasks on the event loop.  Starting a run
clears the previous results and cancels any run still in flight; the
new results appear only when the run completes.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Literal
from uuid import UUID

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from celestial_hexagon.api.sessions import require_session
from celestial_hexagon.core.driver import PatternSearchDriver
from celestial_hexagon.domain.enums import SearchState
from celestial_hexagon.domain.event import EclipseEvent
from celestial_hexagon.domain.pattern import HexagonalPattern
from celestial_hexagon.domain.search import SearchProgress
from celestial_hexagon.explain.formatter import PatternFormatter
from celestial_hexagon.export.csv_export import export_filename, patterns_to_csv
from celestial_hexagon.foundation.cancellation import CancellationToken
from celestial_hexagon.foundation.clock import utc_now
from celestial_hexagon.services.connection_manager import ConnectionManager
from celestial_hexagon.store.session_store import SessionStore

logger = logging.getLogger(__name__)


def create_search_router(
    store: SessionStore,
    driver: PatternSearchDriver,
    progress_manager: ConnectionManager | None = None,
    app_version: str = "1.5.0",
) -> APIRouter:
    """Factory that wires the search endpoints to store + driver."""

    router = APIRouter(prefix="/api", tags=["search"])
    running: set[asyncio.Task] = set()

    async def execute(
        session_id: UUID,
        events: tuple[EclipseEvent, ...],
        generation: int,
        token: CancellationToken,
    ) -> None:
        async def on_progress(progress: SearchProgress) -> None:
            if await store.record_progress(session_id, progress) and progress_manager:
                await progress_manager.broadcast_progress(session_id, progress)

        try:
            result = await driver.run(
                events, on_progress=on_progress, token=token, generation=generation
            )
        except Exception:
            logger.exception("Search run %d for session %s failed", generation, session_id)
            await store.fail_run(session_id, generation)
            return
        await store.complete_run(session_id, generation, result)

    @router.post("/sessions/{session_id}/search", status_code=202)
    async def start_search(session_id: UUID) -> dict[str, Any]:
        await require_session(store, session_id)
        session, generation, token = await store.begin_run(session_id)

        task = asyncio.create_task(execute(session_id, session.events, generation, token))
        running.add(task)
        task.add_done_callback(running.discard)

        return {
            "status": "started",
            "session_id": str(session_id),
            "generation": generation,
            "total_centers": session.event_count,
        }

    @router.get("/sessions/{session_id}/progress")
    async def get_progress(session_id: UUID) -> dict[str, Any]:
        session = await require_session(store, session_id)
        return session.progress_snapshot()

    @router.get("/sessions/{session_id}/patterns")
    async def list_patterns(
        session_id: UUID,
        rank: Literal["center", "score"] = "center",
    ) -> dict[str, Any]:
        session = await require_session(store, session_id)
        patterns: list[HexagonalPattern] = list(session.patterns)
        if rank == "score":
            patterns = HexagonalPattern.ranked(patterns)
        return {
            "state": session.state.value,
            "count": len(patterns),
            "patterns": [p.summary() for p in patterns],
        }

    @router.get("/sessions/{session_id}/patterns/{index}")
    async def get_pattern(session_id: UUID, index: int) -> dict[str, Any]:
        session = await require_session(store, session_id)
        patterns = session.patterns
        if not 0 <= index < len(patterns):
            raise HTTPException(status_code=404, detail=f"No pattern at index {index}")
        pattern = patterns[index]
        return {
            "pattern": pattern.summary(),
            "span_days": PatternFormatter.total_span_days(pattern),
            "human_readable": PatternFormatter.format_plain(pattern),
        }

    @router.get("/sessions/{session_id}/export.csv")
    async def export_patterns(session_id: UUID) -> Response:
        session = await require_session(store, session_id)
        if session.state != SearchState.COMPLETED:
            raise HTTPException(
                status_code=409,
                detail=f"Search is {session.state.value}; export needs a completed run",
            )
        filename = export_filename(app_version, utc_now().date())
        return Response(
            content=patterns_to_csv(session.patterns),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return router
