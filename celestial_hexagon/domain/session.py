"""AnalysisSession — one uploaded catalog and the results of searching it.

A session owns a read-only event sequence for its whole lifetime.  Each
search run bumps the generation counter; results are installed only by
the run that owns the current generation, so an older run that finishes
late can never overwrite a newer one.

Lifecycle of results:  idle → running → completed | cancelled | failed
    - starting a run clears previous results before any work happens
    - results are installed wholesale when the run completes
"""

from __future__ import annotations

from datetime import datetime, timedelta
from uuid import UUID

from celestial_hexagon.domain.enums import SearchState
from celestial_hexagon.domain.event import EclipseEvent
from celestial_hexagon.domain.pattern import HexagonalPattern
from celestial_hexagon.domain.search import SearchProgress, SearchResult
from celestial_hexagon.foundation.cancellation import CancellationToken
from celestial_hexagon.foundation.clock import utc_now
from celestial_hexagon.foundation.identifiers import new_id


class AnalysisSession:
    """A mutable container for one catalog and its latest search.

    Thread-safety note:
        Sessions are mutated *only* while the caller holds the
        SessionStore lock.  They are not themselves locked.
    """

    __slots__ = (
        "session_id",
        "created_at",
        "last_updated",
        "skipped_rows",
        "generation",
        "state",
        "progress",
        "_events",
        "_result",
        "_token",
    )

    def __init__(
        self,
        events: tuple[EclipseEvent, ...],
        skipped_rows: int = 0,
        session_id: UUID | None = None,
    ) -> None:
        now = utc_now()
        self.session_id: UUID = session_id or new_id()
        self.created_at: datetime = now
        self.last_updated: datetime = now
        self.skipped_rows = skipped_rows
        self.generation: int = 0
        self.state: SearchState = SearchState.IDLE
        self.progress: int = 0
        self._events = events
        self._result: SearchResult | None = None
        self._token: CancellationToken | None = None

    # ── Mutation ─────────────────────────────────────────────────────────

    def begin_run(self, token: CancellationToken) -> int:
        """Reset results, cancel any in-flight run, and return the new generation."""
        if self._token is not None:
            self._token.cancel()
        self._token = token
        self.generation += 1
        self.state = SearchState.RUNNING
        self.progress = 0
        self._result = None
        self.last_updated = utc_now()
        return self.generation

    def record_progress(self, progress: SearchProgress) -> bool:
        """Apply a progress snapshot.  Stale generations are ignored."""
        if progress.generation != self.generation:
            return False
        self.progress = progress.progress
        self.last_updated = utc_now()
        return True

    def install_result(self, generation: int, result: SearchResult) -> bool:
        """Install a finished run's result.  Stale generations are ignored."""
        if generation != self.generation:
            return False
        self.state = result.state
        self.progress = result.progress
        self._result = result if result.state == SearchState.COMPLETED else None
        self._token = None
        self.last_updated = utc_now()
        return True

    def fail_run(self, generation: int) -> bool:
        """Mark the current run FAILED.  Stale generations are ignored."""
        if generation != self.generation:
            return False
        self.state = SearchState.FAILED
        self._result = None
        self._token = None
        self.last_updated = utc_now()
        return True

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def events(self) -> tuple[EclipseEvent, ...]:
        return self._events

    @property
    def event_count(self) -> int:
        return len(self._events)

    @property
    def result(self) -> SearchResult | None:
        """Result of the latest completed run, or None."""
        return self._result

    @property
    def patterns(self) -> tuple[HexagonalPattern, ...]:
        return self._result.patterns if self._result else ()

    def is_expired(self, ttl: timedelta) -> bool:
        """True if untouched for longer than *ttl* and not currently running."""
        if self.state == SearchState.RUNNING:
            return False
        return (utc_now() - self.last_updated) > ttl

    def progress_snapshot(self) -> dict:
        return {
            "session_id": str(self.session_id),
            "state": self.state.value,
            "progress": self.progress,
            "generation": self.generation,
        }

    def summary(self) -> dict:
        """Structural facts only, suitable for listings and acknowledgements."""
        first = self._events[0] if self._events else None
        last = self._events[-1] if self._events else None
        return {
            "session_id": str(self.session_id),
            "created_at": self.created_at.isoformat(),
            "last_updated": self.last_updated.isoformat(),
            "event_count": self.event_count,
            "skipped_rows": self.skipped_rows,
            "first_event": first.full_date if first else None,
            "last_event": last.full_date if last else None,
            "state": self.state.value,
            "progress": self.progress,
            "generation": self.generation,
            "pattern_count": len(self.patterns),
        }

    def __repr__(self) -> str:
        return (
            f"AnalysisSession(id={self.session_id!s}, "
            f"events={self.event_count}, "
            f"state={self.state.value}, "
            f"gen={self.generation})"
        )
