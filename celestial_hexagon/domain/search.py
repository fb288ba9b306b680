"""Search progress and result models.

Progress snapshots are published after every batch; the result is
published once, when a run finishes.  A cancelled run carries no
patterns.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from celestial_hexagon.domain.enums import SearchState
from celestial_hexagon.domain.pattern import HexagonalPattern


class SearchProgress(BaseModel):
    """Point-in-time progress of a run."""

    state: SearchState
    progress: int = Field(..., ge=0, le=100, description="Percent of centers processed")
    centers_scanned: int = Field(..., ge=0)
    total_centers: int = Field(..., ge=0)
    patterns_found: int = Field(0, ge=0)
    generation: int = Field(0, ge=0, description="Run counter of the owning session")

    model_config = {"frozen": True}


class SearchResult(BaseModel):
    """Outcome of a finished (completed or cancelled) run."""

    state: SearchState
    patterns: tuple[HexagonalPattern, ...] = ()
    centers_scanned: int = Field(..., ge=0)
    total_centers: int = Field(..., ge=0)
    progress: int = Field(..., ge=0, le=100)

    model_config = {"frozen": True}

    @property
    def pattern_count(self) -> int:
        return len(self.patterns)
