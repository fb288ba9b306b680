"""Canonical EclipseEvent model — the unit of an eclipse catalog.

Events are built once during ingestion and never mutated.  The day
number (``jdn``) is the only field the pattern search does arithmetic
on; everything else is carried for display and export.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from celestial_hexagon.domain.enums import EclipseCategory, EclipseKind
from celestial_hexagon.foundation.calendar import format_full_date


class EclipseEvent(BaseModel):
    """A single catalogued eclipse.

    Immutable after creation.  Validated at the boundary so the search
    core never has to re-check field constraints.
    """

    event_id: str = Field(..., min_length=1, description="Unique within one catalog")
    original_date_str: str = Field("", description="Date string as it appeared in the source row")
    year: int = Field(..., description="Astronomical year (0 = 1 BC, -1 = 2 BC)")
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)
    time_str: str = Field("00:00:00", description="Time of greatest eclipse, HH:MM:SS")
    kind: EclipseKind = EclipseKind.TOTAL
    category: EclipseCategory
    category_label: str = Field("", description="Category cell as written in the source catalog")
    jdn: int = Field(..., description="Julian Day Number derived from (year, month, day)")

    model_config = {"frozen": True}

    @property
    def full_date(self) -> str:
        return format_full_date(self.year, self.month, self.day)

    @property
    def display_category(self) -> str:
        """Source label when known, else the canonical category."""
        return self.category_label or self.category.value

    def __str__(self) -> str:
        return f"{self.full_date} {self.category.value}"
