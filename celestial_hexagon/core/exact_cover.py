"""Exact-cover backtracking over target buckets.

Selects one pair per bucket so that no event id is used twice.  The
search is first-fit: buckets are visited in target order and candidates
in bucket order, and the first complete assignment wins.  It does not
look for the highest-scoring assignment.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from celestial_hexagon.domain.pattern import SymmetryPair


def solve_exact_cover(
    buckets: Sequence[Sequence[SymmetryPair]],
    reserved_ids: Iterable[str] = (),
) -> list[SymmetryPair] | None:
    """Pick one pair per bucket with all event ids distinct.

    Args:
        buckets: Candidate pairs per target interval, in target order.
        reserved_ids: Ids that no selected pair may use (e.g. the center).

    Returns:
        The selected pairs in bucket order, or None if no disjoint
        assignment exists.
    """
    used: set[str] = set(reserved_ids)
    chosen: list[SymmetryPair] = []

    def backtrack(depth: int) -> bool:
        if depth == len(buckets):
            return True
        for pair in buckets[depth]:
            left_id, right_id = pair.event_ids
            if left_id in used or right_id in used:
                continue
            used.add(left_id)
            used.add(right_id)
            chosen.append(pair)
            if backtrack(depth + 1):
                return True
            chosen.pop()
            used.discard(left_id)
            used.discard(right_id)
        return False

    if backtrack(0):
        return chosen
    return None
