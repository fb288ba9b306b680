"""celestial-hexagon — symmetric eclipse pattern search service.

This is the application entry point.  It wires the SessionStore,
AdapterRegistry, PatternSearchDriver, and the REST/WebSocket endpoints
together.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path

from fastapi import FastAPI

from celestial_hexagon.adapters.catalog import load_catalog
from celestial_hexagon.adapters.registry import default_registry
from celestial_hexagon.api.search import create_search_router
from celestial_hexagon.api.sessions import create_sessions_router
from celestial_hexagon.api.ws_progress import create_progress_router
from celestial_hexagon.config import settings
from celestial_hexagon.core.driver import PatternSearchDriver
from celestial_hexagon.core.pattern_engine import PatternSearchEngine, SearchConfig
from celestial_hexagon.services.connection_manager import ConnectionManager
from celestial_hexagon.store.session_store import SessionStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

# ── Search ───────────────────────────────────────────────────────────────────

engine = PatternSearchEngine(
    SearchConfig(
        target_distances=tuple(settings.target_distances),
        tolerance_days=settings.tolerance_days,
        max_window_days=settings.max_window_days,
        score_smoothing=settings.score_smoothing,
    )
)
driver = PatternSearchDriver(engine, chunk_size=settings.chunk_size)

# ── State ────────────────────────────────────────────────────────────────────

store = SessionStore(ttl=timedelta(minutes=settings.session_ttl_minutes))
progress_manager = ConnectionManager()

# ── Adapter Registry ────────────────────────────────────────────────────────

registry = default_registry()

# ── App ──────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.default_catalog_path:
        path = Path(settings.default_catalog_path)
        report = load_catalog(path.read_text(encoding="utf-8-sig"), registry)
        session = await store.create(report.events, skipped_rows=report.skipped_rows)
        logger.info("Preloaded default catalog %s as session %s", path, session.session_id)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Hexagonal symmetry pattern search over eclipse catalogs",
    version=settings.app_version,
    lifespan=lifespan,
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_sessions_router(store, registry))
app.include_router(create_search_router(
    store,
    driver,
    progress_manager,
    app_version=settings.app_version,
))
app.include_router(create_progress_router(progress_manager))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "version": settings.app_version,
        "sessions": await store.count(),
        "progress_clients": progress_manager.active_count,
        "target_distances": list(engine.config.target_distances),
        "tolerance_days": engine.config.tolerance_days,
        "max_window_days": engine.config.max_window_days,
        "adapters": registry.stats,
        "total_adapted": registry.total_accepted,
        "total_rejected": registry.total_rejected,
    }
