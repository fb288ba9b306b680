"""Chunked progress driver — runs the per-center search over a whole catalog.

Centers are processed in fixed-size batches.  After each batch the driver
publishes a SearchProgress and yields to the event loop, which is the
only suspension point of a run.  Cancellation is cooperative: the token
is checked after every yield.

State machine:
    IDLE → RUNNING → COMPLETED
                   ↘ CANCELLED

Patterns are only exposed once the run has COMPLETED; a cancelled run
publishes none.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Sequence
from typing import Any, Callable

from celestial_hexagon.core.pattern_engine import PatternSearchEngine
from celestial_hexagon.domain.enums import SearchState
from celestial_hexagon.domain.event import EclipseEvent
from celestial_hexagon.domain.pattern import HexagonalPattern
from celestial_hexagon.domain.search import SearchProgress, SearchResult
from celestial_hexagon.foundation.cancellation import CancellationToken

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100

ProgressCallback = Callable[[SearchProgress], Any]


class SearchRun:
    """One pass of the engine over an event sequence, one batch per step().

    Not thread-safe; a run is owned by a single task.
    """

    def __init__(
        self,
        engine: PatternSearchEngine,
        events: Sequence[EclipseEvent],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        generation: int = 0,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self._engine = engine
        self._events = events
        self._chunk_size = chunk_size
        self._generation = generation
        self._position = 0
        self._progress = 0
        self._found: list[HexagonalPattern] = []
        self.state = SearchState.IDLE

    # ── Stepping ─────────────────────────────────────────────────────────

    @property
    def done(self) -> bool:
        return self.state in (SearchState.COMPLETED, SearchState.CANCELLED)

    def step(self) -> SearchProgress:
        """Process the next batch of centers and report progress."""
        if self.done:
            raise RuntimeError(f"run already {self.state.value}")
        self.state = SearchState.RUNNING

        total = len(self._events)
        end = min(self._position + self._chunk_size, total)
        for center_index in range(self._position, end):
            pattern = self._engine.search_center(self._events, center_index)
            if pattern is not None:
                self._found.append(pattern)
        self._position = end

        # An empty catalog completes on its first step
        self._progress = (end * 100) // total if total else 100
        if end == total:
            self.state = SearchState.COMPLETED
        return self.snapshot()

    def cancel(self) -> None:
        """Abandon the run.  A completed run keeps its result."""
        if self.state in (SearchState.IDLE, SearchState.RUNNING):
            self.state = SearchState.CANCELLED
            self._found.clear()

    # ── Queries ──────────────────────────────────────────────────────────

    def snapshot(self) -> SearchProgress:
        return SearchProgress(
            state=self.state,
            progress=self._progress,
            centers_scanned=self._position,
            total_centers=len(self._events),
            patterns_found=len(self._found),
            generation=self._generation,
        )

    def result(self) -> SearchResult:
        if not self.done:
            raise RuntimeError("run has not finished")
        return SearchResult(
            state=self.state,
            patterns=tuple(self._found),
            centers_scanned=self._position,
            total_centers=len(self._events),
            progress=self._progress,
        )


class PatternSearchDriver:
    """Drives a PatternSearchEngine across every center of a catalog."""

    def __init__(
        self,
        engine: PatternSearchEngine,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self._engine = engine
        self._chunk_size = chunk_size

    @property
    def engine(self) -> PatternSearchEngine:
        return self._engine

    def start(self, events: Sequence[EclipseEvent], generation: int = 0) -> SearchRun:
        """Create an IDLE run; the caller drives it with step()."""
        return SearchRun(self._engine, events, self._chunk_size, generation)

    def run_sync(self, events: Sequence[EclipseEvent]) -> SearchResult:
        """Run to completion without yielding."""
        run = self.start(events)
        while not run.done:
            run.step()
        return run.result()

    async def run(
        self,
        events: Sequence[EclipseEvent],
        on_progress: ProgressCallback | None = None,
        token: CancellationToken | None = None,
        generation: int = 0,
    ) -> SearchResult:
        """Run to completion, yielding to the event loop after each batch.

        Args:
            events: Catalog sorted ascending by jdn.
            on_progress: Called (and awaited, if it returns an awaitable)
                with a SearchProgress after every batch.
            token: Checked after each yield; when set the run is cancelled.
            generation: Session run counter echoed in progress snapshots.
        """
        run = self.start(events, generation)
        logger.info(
            "Pattern search started: generation=%d centers=%d chunk=%d",
            generation, len(events), self._chunk_size,
        )

        while not run.done:
            progress = run.step()
            logger.debug(
                "Batch done: %d/%d centers (%d%%), %d pattern(s)",
                progress.centers_scanned, progress.total_centers,
                progress.progress, progress.patterns_found,
            )
            if on_progress is not None:
                outcome = on_progress(progress)
                if inspect.isawaitable(outcome):
                    await outcome

            await asyncio.sleep(0)

            if token is not None and token.cancelled:
                run.cancel()
                break

        result = run.result()
        logger.info(
            "Pattern search %s: generation=%d patterns=%d centers=%d/%d",
            result.state.value, generation, result.pattern_count,
            result.centers_scanned, result.total_centers,
        )
        return result
