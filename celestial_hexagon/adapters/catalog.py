"""Catalog loader — CSV text in, sorted EclipseEvent sequence out.

Rows are ``date, kind, category``.  The first line and any line carrying
a header label are skipped, as are blank and short rows.  Rows no adapter
can translate are dropped and counted; a bad row never aborts a load.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass

from celestial_hexagon.adapters.registry import AdapterRegistry, RowRejectedError, default_registry
from celestial_hexagon.domain.event import EclipseEvent

logger = logging.getLogger(__name__)

HEADER_MARKERS = ("날짜 및 시간", "date")


@dataclass(frozen=True)
class CatalogLoadReport:
    """Outcome of loading one catalog."""

    events: tuple[EclipseEvent, ...]
    skipped_rows: int

    @property
    def event_count(self) -> int:
        return len(self.events)


def _is_header(line_index: int, line: str) -> bool:
    if line_index == 0:
        return True
    lowered = line.lower()
    return any(marker in lowered for marker in HEADER_MARKERS)


def load_catalog(text: str, registry: AdapterRegistry | None = None) -> CatalogLoadReport:
    """Parse a CSV catalog and return its events sorted by jdn.

    Sorting is stable, so events sharing a day keep their file order.
    """
    registry = registry or default_registry()
    events: list[EclipseEvent] = []
    skipped = 0

    for line_index, line in enumerate(text.splitlines()):
        stripped = line.strip()
        if not stripped or _is_header(line_index, stripped):
            continue

        row = next(csv.reader(io.StringIO(stripped)), [])
        if len(row) < 3:
            skipped += 1
            continue

        try:
            events.append(registry.adapt(row, line_index))
        except RowRejectedError as exc:
            logger.debug("Skipping line %d: %s", line_index, exc)
            skipped += 1

    events.sort(key=lambda e: e.jdn)
    logger.info("Loaded catalog: %d event(s), %d skipped row(s)", len(events), skipped)
    return CatalogLoadReport(events=tuple(events), skipped_rows=skipped)
