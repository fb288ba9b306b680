"""In-memory AnalysisSession store with async-safe access and TTL expiry.

Design notes:
    - An asyncio.Lock guards all mutations so concurrent request handlers
      and background search tasks never corrupt session state.
    - The store does NOT search.  It tracks catalogs, hands out run
      generations, and installs results that belong to the current one.
    - Results are cleared when a run starts and installed when it
      finishes; readers never observe a half-written result set.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import timedelta
from uuid import UUID

from celestial_hexagon.domain.event import EclipseEvent
from celestial_hexagon.domain.search import SearchProgress, SearchResult
from celestial_hexagon.domain.session import AnalysisSession
from celestial_hexagon.foundation.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class SessionNotFoundError(LookupError):
    """Raised when a session id is unknown or has expired."""

    def __init__(self, session_id: UUID) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


class SessionStore:
    """Async-safe, in-memory store for analysis sessions.

    Args:
        ttl: How long a session may sit untouched before it is eligible
             for removal.  Running sessions never expire.
    """

    def __init__(self, ttl: timedelta = timedelta(minutes=120)) -> None:
        self._ttl = ttl
        self._lock = asyncio.Lock()
        self._sessions: dict[UUID, AnalysisSession] = {}

    # ── Public API ───────────────────────────────────────────────────────

    async def create(
        self,
        events: Sequence[EclipseEvent],
        skipped_rows: int = 0,
    ) -> AnalysisSession:
        """Register a sorted catalog as a new session."""
        async with self._lock:
            session = AnalysisSession(tuple(events), skipped_rows=skipped_rows)
            self._sessions[session.session_id] = session
            logger.info(
                "Created session %s (%d events, %d skipped rows)",
                session.session_id, session.event_count, skipped_rows,
            )
            return session

    async def get(self, session_id: UUID) -> AnalysisSession | None:
        async with self._lock:
            return self._sessions.get(session_id)

    async def require(self, session_id: UUID) -> AnalysisSession:
        session = await self.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def list_sessions(self) -> list[AnalysisSession]:
        async with self._lock:
            return list(self._sessions.values())

    async def count(self) -> int:
        async with self._lock:
            return len(self._sessions)

    async def begin_run(self, session_id: UUID) -> tuple[AnalysisSession, int, CancellationToken]:
        """Start a new run: clear results, cancel the previous run, bump generation."""
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            token = CancellationToken()
            generation = session.begin_run(token)
            logger.info("Session %s: run generation %d started", session_id, generation)
            return session, generation, token

    async def record_progress(self, session_id: UUID, progress: SearchProgress) -> bool:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return False
            return session.record_progress(progress)

    async def complete_run(
        self,
        session_id: UUID,
        generation: int,
        result: SearchResult,
    ) -> bool:
        """Install *result* if *generation* is still current.

        Returns False when the session is gone or a newer run has started.
        """
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                logger.info("Session %s vanished before run %d finished", session_id, generation)
                return False
            installed = session.install_result(generation, result)
            if installed:
                logger.info(
                    "Session %s: generation %d %s with %d pattern(s)",
                    session_id, generation, result.state.value, result.pattern_count,
                )
            else:
                logger.info(
                    "Session %s: discarded stale result of generation %d (current %d)",
                    session_id, generation, session.generation,
                )
            return installed

    async def fail_run(self, session_id: UUID, generation: int) -> bool:
        """Put the session in FAILED if *generation* is still current."""
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return False
            failed = session.fail_run(generation)
            if failed:
                logger.warning("Session %s: generation %d failed", session_id, generation)
            return failed

    async def expire_stale(self) -> list[UUID]:
        """Remove sessions idle for longer than the TTL."""
        async with self._lock:
            expired_ids = [
                sid for sid, session in self._sessions.items()
                if session.is_expired(self._ttl)
            ]
            for sid in expired_ids:
                self._sessions.pop(sid, None)
            if expired_ids:
                logger.info("Expired %d stale session(s)", len(expired_ids))
            return expired_ids
