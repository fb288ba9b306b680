"""Symmetry pairs and hexagonal patterns — outputs of the pattern search.

A SymmetryPair is transient: it exists only while one center is being
searched.  A HexagonalPattern is the accepted result for a center and is
kept for the lifetime of an analysis run.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from celestial_hexagon.domain.event import EclipseEvent


class SymmetryPair(BaseModel):
    """Two events straddling a center at nearly equal day offsets."""

    left: EclipseEvent
    right: EclipseEvent
    distance_left: int = Field(..., gt=0, description="center.jdn - left.jdn")
    distance_right: int = Field(..., gt=0, description="right.jdn - center.jdn")
    average_distance: float
    diff: float = Field(..., ge=0.0, description="|distance_left - distance_right|")

    model_config = {"frozen": True}

    @property
    def event_ids(self) -> tuple[str, str]:
        return (self.left.event_id, self.right.event_id)


class HexagonalPattern(BaseModel):
    """A center event plus one symmetry pair per target interval.

    Pairs are ordered by descending average distance.
    """

    center: EclipseEvent
    pairs: tuple[SymmetryPair, ...]
    score: float

    model_config = {"frozen": True}

    def event_ids(self) -> list[str]:
        """Center id followed by left/right ids of every pair."""
        ids = [self.center.event_id]
        for pair in self.pairs:
            ids.extend(pair.event_ids)
        return ids

    def events(self) -> list[EclipseEvent]:
        """All member events, center first."""
        members = [self.center]
        for pair in self.pairs:
            members.extend((pair.left, pair.right))
        return members

    def summary(self) -> dict:
        return {
            "center_id": self.center.event_id,
            "center_date": self.center.full_date,
            "center_category": self.center.category.value,
            "score": round(self.score, 4),
            "pairs": [
                {
                    "left_date": p.left.full_date,
                    "right_date": p.right.full_date,
                    "distance_left": p.distance_left,
                    "distance_right": p.distance_right,
                    "average_distance": p.average_distance,
                    "diff": p.diff,
                }
                for p in self.pairs
            ],
        }

    @staticmethod
    def ranked(patterns: Iterable[HexagonalPattern]) -> list[HexagonalPattern]:
        """Patterns by descending score; ties keep center order."""
        return sorted(patterns, key=lambda p: p.score, reverse=True)
