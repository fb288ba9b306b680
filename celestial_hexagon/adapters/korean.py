"""KoreanCatalogAdapter — rows from the Korean eclipse catalog export.

Expected raw format (header ``날짜 및 시간,종류,구분``):

    -3974-07-25 16:41:19,개기,일식
    0-01-10 07:34:47,개기,월식
"""

from __future__ import annotations

from celestial_hexagon.adapters.base import EventRowAdapter
from celestial_hexagon.domain.enums import EclipseCategory, EclipseKind


class KoreanCatalogAdapter(EventRowAdapter):
    """Maps Korean kind/category labels onto the canonical enums."""

    kind_labels = {"개기": EclipseKind.TOTAL}
    category_labels = {
        "일식": EclipseCategory.SOLAR,
        "월식": EclipseCategory.LUNAR,
    }

    @property
    def source_name(self) -> str:
        return "korean_catalog"

    def normalise_label(self, label: str) -> str:
        return label.strip()
