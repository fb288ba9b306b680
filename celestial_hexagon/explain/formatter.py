"""PatternFormatter — deterministic plain-text rendering of a pattern.

Lays every member of a pattern on a single day-number axis: the center,
then each pair's left (``L0``…) and right (``R0``…) event, sorted by jdn
and annotated with the signed offset from the center.

Usage:
    text = PatternFormatter.format_plain(pattern)
"""

from __future__ import annotations

from dataclasses import dataclass

from celestial_hexagon.domain.event import EclipseEvent
from celestial_hexagon.domain.pattern import HexagonalPattern

CENTER_ROLE = "Center"


@dataclass(frozen=True)
class TimelineEntry:
    role: str
    event: EclipseEvent
    offset_days: int  # negative before the center


class PatternFormatter:
    """Stateless text views over a HexagonalPattern."""

    @staticmethod
    def timeline(pattern: HexagonalPattern) -> list[TimelineEntry]:
        """All member events sorted by jdn, tagged with their role."""
        center = pattern.center
        entries = [TimelineEntry(CENTER_ROLE, center, 0)]
        for i, pair in enumerate(pattern.pairs):
            entries.append(TimelineEntry(f"L{i}", pair.left, pair.left.jdn - center.jdn))
            entries.append(TimelineEntry(f"R{i}", pair.right, pair.right.jdn - center.jdn))
        return sorted(entries, key=lambda e: e.event.jdn)

    @staticmethod
    def total_span_days(pattern: HexagonalPattern) -> int:
        """Days between the earliest and latest member."""
        jdns = [e.jdn for e in pattern.events()]
        return max(jdns) - min(jdns)

    @classmethod
    def format_plain(cls, pattern: HexagonalPattern) -> str:
        center = pattern.center
        lines = [
            f"Center: {center.full_date} {center.time_str} ({center.category.value})",
            f"Score: {pattern.score:.2f}",
            f"Span: {cls.total_span_days(pattern)} days",
            "",
            "Pairs:",
        ]
        for i, pair in enumerate(pattern.pairs):
            lines.append(
                f"  {i}: {pair.left.full_date} <- {pair.distance_left}d | "
                f"{pair.distance_right}d -> {pair.right.full_date} "
                f"(avg {pair.average_distance:.1f}, diff {pair.diff:g})"
            )
        lines += ["", "Timeline:"]
        for entry in cls.timeline(pattern):
            lines.append(
                f"  {entry.role:<6} {entry.event.full_date:<16} "
                f"{entry.offset_days:+d}d {entry.event.category.value}"
            )
        return "\n".join(lines)
