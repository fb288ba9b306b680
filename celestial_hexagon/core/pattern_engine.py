"""PatternSearchEngine — deterministic hexagonal-pattern search per center.

Design principles:
    1. Pure: accepts the event sequence and a center index, returns a
       HexagonalPattern or None.
    2. No side effects, no state mutation, no I/O.
    3. First-fit: the first disjoint assignment found is the one scored.
    4. All parameters are explicit and live in SearchConfig.

Pipeline per center:
    find_candidate_pairs → group_by_target → solve_exact_cover → score

Score formula:
    score = Σ over pairs of (1 - diff / (tolerance_days + score_smoothing))

    Each pair contributes 1.0 when perfectly symmetric (diff = 0) and less
    as diff approaches the tolerance.  score_smoothing keeps the
    denominator positive when tolerance_days is 0.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from celestial_hexagon.core.exact_cover import solve_exact_cover
from celestial_hexagon.core.symmetry import find_candidate_pairs, group_by_target
from celestial_hexagon.domain.event import EclipseEvent
from celestial_hexagon.domain.pattern import HexagonalPattern, SymmetryPair

logger = logging.getLogger(__name__)

DEFAULT_TARGET_DISTANCES: tuple[float, ...] = (1211, 856, 694, 517)
DEFAULT_TOLERANCE_DAYS = 1.0
MAX_WINDOW_DAYS = 2922.0  # ~8 years
SCORE_SMOOTHING = 0.1


@dataclass(frozen=True)
class SearchConfig:
    """Parameters for the per-center pattern search."""

    target_distances: tuple[float, ...] = field(default=DEFAULT_TARGET_DISTANCES)
    tolerance_days: float = DEFAULT_TOLERANCE_DAYS
    max_window_days: float = MAX_WINDOW_DAYS
    # Added to the tolerance in the score denominator
    score_smoothing: float = SCORE_SMOOTHING

    def __post_init__(self) -> None:
        # Accept any sequence from callers but store a tuple
        object.__setattr__(self, "target_distances", tuple(self.target_distances))
        if not self.target_distances:
            raise ValueError("target_distances must not be empty")
        if self.tolerance_days < 0:
            raise ValueError("tolerance_days must be non-negative")
        if self.max_window_days <= 0:
            raise ValueError("max_window_days must be positive")
        if self.score_smoothing < 0:
            raise ValueError("score_smoothing must be non-negative")
        if self.tolerance_days + self.score_smoothing == 0:
            raise ValueError("tolerance_days + score_smoothing must be positive")


class PatternSearchEngine:
    """Stateless hexagonal-pattern search.

    Each call to search_center() keeps its own used-id set; nothing is
    shared between centers.
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        self._config = config or SearchConfig()

    @property
    def config(self) -> SearchConfig:
        return self._config

    # ── Public API ───────────────────────────────────────────────────────

    def search_center(
        self,
        events: Sequence[EclipseEvent],
        center_index: int,
    ) -> HexagonalPattern | None:
        """Search one center.  Returns None when it yields no pattern."""
        cfg = self._config
        center = events[center_index]

        candidates = find_candidate_pairs(
            events, center_index, cfg.max_window_days, cfg.tolerance_days
        )
        buckets = group_by_target(candidates, cfg.target_distances, cfg.tolerance_days)
        if buckets is None:
            return None

        selected = solve_exact_cover(buckets, reserved_ids=(center.event_id,))
        if selected is None:
            logger.debug(
                "Center %s: buckets filled but no disjoint assignment (%s)",
                center.event_id,
                [len(b) for b in buckets],
            )
            return None

        pattern = self.build_pattern(center, selected)
        logger.debug("Center %s: pattern found, score=%.3f", center.event_id, pattern.score)
        return pattern

    def search_all(self, events: Sequence[EclipseEvent]) -> list[HexagonalPattern]:
        """Run search_center() over every index, in sequence order."""
        found: list[HexagonalPattern] = []
        for idx in range(len(events)):
            pattern = self.search_center(events, idx)
            if pattern is not None:
                found.append(pattern)
        return found

    # ── Scoring ──────────────────────────────────────────────────────────

    def score(self, pairs: Sequence[SymmetryPair]) -> float:
        denominator = self._config.tolerance_days + self._config.score_smoothing
        return sum(1 - pair.diff / denominator for pair in pairs)

    def build_pattern(
        self,
        center: EclipseEvent,
        pairs: Sequence[SymmetryPair],
    ) -> HexagonalPattern:
        """Order pairs by descending average distance and attach the score."""
        ordered = sorted(pairs, key=lambda p: p.average_distance, reverse=True)
        return HexagonalPattern(
            center=center,
            pairs=tuple(ordered),
            score=self.score(ordered),
        )
