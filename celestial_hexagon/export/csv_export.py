"""CSV export of pattern results.

One row per pattern with a fixed four-pair layout (Pair A–D).  Pairs
beyond the fourth are not exported; missing pairs leave blank cells.
The output starts with a UTF-8 BOM so spreadsheet tools pick up the
encoding of Korean category labels, which are exported as written in
the source catalog.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from datetime import date

from celestial_hexagon.domain.pattern import HexagonalPattern

EXPORTED_PAIRS = 4
_PAIR_LABELS = "ABCD"
BOM = "\ufeff"


def csv_headers() -> list[str]:
    headers = ["Pattern ID", "Center Date", "Center Type"]
    for label in _PAIR_LABELS[:EXPORTED_PAIRS]:
        headers += [
            f"Pair {label} (L Date)",
            f"Pair {label} (R Date)",
            f"Pair {label} (Avg Dist)",
        ]
    return headers


def pattern_row(index: int, pattern: HexagonalPattern) -> list[str]:
    center = pattern.center
    row = [
        f"#{index + 1}",
        center.full_date,
        center.display_category,
    ]
    for i in range(EXPORTED_PAIRS):
        if i < len(pattern.pairs):
            pair = pattern.pairs[i]
            row += [
                pair.left.full_date,
                pair.right.full_date,
                f"{pair.average_distance:.1f}",
            ]
        else:
            row += ["", "", ""]
    return row


def patterns_to_csv(patterns: Iterable[HexagonalPattern]) -> str:
    """Render patterns as CSV text, numbered in iteration order."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(csv_headers())
    for index, pattern in enumerate(patterns):
        writer.writerow(pattern_row(index, pattern))
    return BOM + buffer.getvalue()


def export_filename(version: str, today: date) -> str:
    return f"eclipse_patterns_v{version}_{today.isoformat()}.csv"
