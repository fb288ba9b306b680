"""Catalog dialect registry.

Each row is offered to the registered dialects in order; the first
whose can_handle() accepts the category cell translates it.  Rows no
dialect recognises, and rows a dialect recognises but cannot parse,
both surface as RowRejectedError so the loader can count and skip them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass

from celestial_hexagon.adapters.base import EventRowAdapter
from celestial_hexagon.adapters.english import EnglishCatalogAdapter
from celestial_hexagon.adapters.korean import KoreanCatalogAdapter
from celestial_hexagon.domain.event import EclipseEvent

logger = logging.getLogger(__name__)


class RowRejectedError(Exception):
    """A catalog line that did not become an EclipseEvent."""

    def __init__(self, line_index: int, reason: str) -> None:
        self.line_index = line_index
        self.reason = reason
        super().__init__(f"line {line_index}: {reason}")


class NoAdapterFoundError(RowRejectedError):
    """No registered dialect recognises the row's category label."""


class AdaptationError(RowRejectedError):
    """A dialect claimed the row but its date or labels were invalid."""

    def __init__(self, source_name: str, line_index: int, reason: str) -> None:
        self.source_name = source_name
        super().__init__(line_index, f"{source_name}: {reason}")


@dataclass
class DialectTally:
    source: str
    accepted: int = 0
    rejected: int = 0


class AdapterRegistry:
    """Ordered set of catalog dialects with per-dialect counters."""

    def __init__(self) -> None:
        self._adapters: list[EventRowAdapter] = []
        self._tallies: dict[str, DialectTally] = {}
        self.unmatched: int = 0

    def register(self, adapter: EventRowAdapter) -> None:
        name = adapter.source_name
        if name in self._tallies:
            raise ValueError(f"dialect {name!r} is already registered")
        self._adapters.append(adapter)
        self._tallies[name] = DialectTally(name)
        logger.info("Registered catalog dialect: %s", name)

    def _select(self, row: Sequence[str]) -> EventRowAdapter | None:
        return next((a for a in self._adapters if a.can_handle(row)), None)

    def adapt(self, row: Sequence[str], line_index: int) -> EclipseEvent:
        """Translate one parsed CSV row.

        Raises:
            NoAdapterFoundError: No dialect recognises the category cell.
            AdaptationError: The selected dialect raised ValueError.
        """
        adapter = self._select(row)
        if adapter is None:
            self.unmatched += 1
            label = row[2].strip() if len(row) > 2 else ""
            raise NoAdapterFoundError(line_index, f"unrecognised category {label!r}")

        tally = self._tallies[adapter.source_name]
        try:
            event = adapter.adapt(row, line_index)
        except ValueError as exc:
            tally.rejected += 1
            logger.warning("Line %d rejected by %s: %s", line_index, adapter.source_name, exc)
            raise AdaptationError(adapter.source_name, line_index, str(exc)) from exc
        tally.accepted += 1
        return event

    # ── Counters ─────────────────────────────────────────────────────────

    @property
    def stats(self) -> list[dict]:
        return [asdict(t) for t in self._tallies.values()]

    @property
    def total_accepted(self) -> int:
        return sum(t.accepted for t in self._tallies.values())

    @property
    def total_rejected(self) -> int:
        return sum(t.rejected for t in self._tallies.values()) + self.unmatched


def default_registry() -> AdapterRegistry:
    """Korean dialect first, then English."""
    registry = AdapterRegistry()
    registry.register(KoreanCatalogAdapter())
    registry.register(EnglishCatalogAdapter())
    return registry
