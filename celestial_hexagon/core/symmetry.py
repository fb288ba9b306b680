"""Candidate-pair generation and target grouping for one center.

Both functions are pure: they read the sorted event sequence and return
new values.  Every tolerance check is a closed interval (``<=``) so a pair
accepted as symmetric is never lost to an off-by-epsilon at grouping.
"""

from __future__ import annotations

from collections.abc import Sequence

from celestial_hexagon.domain.event import EclipseEvent
from celestial_hexagon.domain.pattern import SymmetryPair


def window_neighbours(
    events: Sequence[EclipseEvent],
    center_index: int,
    max_window_days: float,
) -> tuple[list[EclipseEvent], list[EclipseEvent]]:
    """Events within *max_window_days* before and after the center.

    Walks outward from the center and stops at the first event beyond the
    window; the sequence is sorted so nothing further can qualify.  Events
    sharing the center's day number sit at distance zero and are skipped.
    Left neighbours come nearest-first, right neighbours nearest-first.
    """
    center = events[center_index]
    left: list[EclipseEvent] = []
    right: list[EclipseEvent] = []

    for j in range(center_index - 1, -1, -1):
        distance = center.jdn - events[j].jdn
        if distance > max_window_days:
            break
        if distance > 0:
            left.append(events[j])

    for k in range(center_index + 1, len(events)):
        distance = events[k].jdn - center.jdn
        if distance > max_window_days:
            break
        if distance > 0:
            right.append(events[k])

    return left, right


def find_candidate_pairs(
    events: Sequence[EclipseEvent],
    center_index: int,
    max_window_days: float,
    tolerance: float,
) -> list[SymmetryPair]:
    """All (left, right) pairs around the center whose offsets differ by at most *tolerance*.

    Output order is left-nearest first, then right-nearest first within
    each left event.  The exact-cover search depends on this order being
    deterministic.
    """
    center = events[center_index]
    left, right = window_neighbours(events, center_index, max_window_days)

    pairs: list[SymmetryPair] = []
    for lhs in left:
        d_left = center.jdn - lhs.jdn
        for rhs in right:
            d_right = rhs.jdn - center.jdn
            diff = abs(d_left - d_right)
            if diff <= tolerance:
                pairs.append(
                    SymmetryPair(
                        left=lhs,
                        right=rhs,
                        distance_left=d_left,
                        distance_right=d_right,
                        average_distance=(d_left + d_right) / 2,
                        diff=diff,
                    )
                )
    return pairs


def group_by_target(
    pairs: Sequence[SymmetryPair],
    target_distances: Sequence[float],
    tolerance: float,
) -> list[list[SymmetryPair]] | None:
    """One bucket per target interval, in target order.

    Returns None as soon as any bucket is empty: that center cannot yield
    a pattern.  Non-empty buckets are necessary but not sufficient, since
    the exact-cover search may still fail on event reuse.
    """
    buckets: list[list[SymmetryPair]] = []
    for target in target_distances:
        bucket = [p for p in pairs if abs(p.average_distance - target) <= tolerance]
        if not bucket:
            return None
        buckets.append(bucket)
    return buckets
