"""EnglishCatalogAdapter — rows labelled in English.

Expected raw format (header ``date,kind,category``):

    2024-04-08 18:17:16,total,solar
    2025-03-14 06:58:43,Total,Lunar
"""

from __future__ import annotations

from celestial_hexagon.adapters.base import EventRowAdapter
from celestial_hexagon.domain.enums import EclipseCategory, EclipseKind


class EnglishCatalogAdapter(EventRowAdapter):
    """Case-insensitive English labels."""

    kind_labels = {"total": EclipseKind.TOTAL}
    category_labels = {
        "solar": EclipseCategory.SOLAR,
        "lunar": EclipseCategory.LUNAR,
    }

    @property
    def source_name(self) -> str:
        return "english_catalog"

    def normalise_label(self, label: str) -> str:
        return label.strip().lower()
