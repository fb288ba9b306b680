"""Abstract base for catalog row adapters.

Row adapters normalise one CSV row from an eclipse catalog into the
canonical EclipseEvent model.

Architectural rules:
    1. Adapters must NOT mutate the incoming row.
    2. adapt() must return a fully valid EclipseEvent or raise ValueError.
    3. No adapter may touch the SessionStore or the search core.
    4. Only field mapping and date arithmetic live inside an adapter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from celestial_hexagon.domain.enums import EclipseCategory, EclipseKind
from celestial_hexagon.domain.event import EclipseEvent
from celestial_hexagon.foundation.calendar import date_to_jdn, parse_eclipse_date
from celestial_hexagon.foundation.identifiers import event_id


class EventRowAdapter(ABC):
    """Base class for converting raw ``date, kind, category`` rows into events.

    Subclasses only declare their label vocabularies; parsing and id
    assignment are shared.
    """

    #: Source label → EclipseKind
    kind_labels: Mapping[str, EclipseKind] = {}
    #: Source label → EclipseCategory
    category_labels: Mapping[str, EclipseCategory] = {}

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable name of the catalog dialect this adapter handles."""
        ...

    @abstractmethod
    def normalise_label(self, label: str) -> str:
        """Canonical lookup form of a label cell (e.g. stripped, lower-cased)."""
        ...

    def can_handle(self, row: Sequence[str]) -> bool:
        """Fast, non-destructive check on the category column."""
        if len(row) < 3:
            return False
        return self.normalise_label(row[2]) in self.category_labels

    def adapt(self, row: Sequence[str], line_index: int) -> EclipseEvent:
        """Translate a row into a validated EclipseEvent.

        Raises:
            ValueError: If the date or labels cannot be normalised.
        """
        if len(row) < 3:
            raise ValueError(f"expected 3 columns, got {len(row)}")

        date_cell = row[0].strip()
        parsed = parse_eclipse_date(date_cell)
        if parsed is None:
            raise ValueError(f"unparseable date {date_cell!r}")

        kind = self.kind_labels.get(self.normalise_label(row[1]))
        if kind is None:
            raise ValueError(f"unknown eclipse kind {row[1].strip()!r}")
        category = self.category_labels.get(self.normalise_label(row[2]))
        if category is None:
            raise ValueError(f"unknown eclipse category {row[2].strip()!r}")

        jdn = date_to_jdn(parsed.year, parsed.month, parsed.day)
        return EclipseEvent.model_validate({
            "event_id": event_id(line_index, jdn),
            "original_date_str": date_cell,
            "year": parsed.year,
            "month": parsed.month,
            "day": parsed.day,
            "time_str": parsed.time,
            "kind": kind,
            "category": category,
            "category_label": row[2].strip(),
            "jdn": jdn,
        })
