"""Tests for catalog row adapters, the registry, and the catalog loader.

Tests adapter selection, row rejection, label normalisation, canonical
EclipseEvent validation after adaptation, registry stats, and loading.
"""

from __future__ import annotations

import pytest

from celestial_hexagon.adapters.catalog import load_catalog
from celestial_hexagon.adapters.english import EnglishCatalogAdapter
from celestial_hexagon.adapters.korean import KoreanCatalogAdapter
from celestial_hexagon.adapters.registry import (
    AdaptationError,
    AdapterRegistry,
    NoAdapterFoundError,
    RowRejectedError,
    default_registry,
)
from celestial_hexagon.core.pattern_engine import PatternSearchEngine
from celestial_hexagon.domain.enums import EclipseCategory, EclipseKind
from celestial_hexagon.foundation.calendar import date_to_jdn

from tests.test_calendar import _catalog_date


# ── Realistic Raw Rows ───────────────────────────────────────────────────────

_KOREAN_HEADER = "날짜 및 시간,종류,구분"


def _korean_row(date: str = "-3974-07-25 16:41:19", kind: str = "개기", category: str = "일식") -> list[str]:
    return [date, kind, category]


def _english_row(date: str = "2024-04-08 18:17:16", kind: str = "total", category: str = "solar") -> list[str]:
    return [date, kind, category]


def _hexagon_csv(center_jdn: int, header: str = _KOREAN_HEADER) -> str:
    """Korean catalog with a perfect hexagon around *center_jdn*, rows shuffled."""
    offsets = [517, -1211, 0, 856, -694, 1211, -517, 694, -856]
    rows = [header]
    for i, offset in enumerate(offsets):
        category = "일식" if i % 2 else "월식"
        rows.append(f"{_catalog_date(center_jdn + offset)},개기,{category}")
    return "\n".join(rows)


# ── Individual adapters ──────────────────────────────────────────────────────


class TestKoreanCatalogAdapter:
    def test_can_handle_korean_categories(self) -> None:
        adapter = KoreanCatalogAdapter()
        assert adapter.can_handle(_korean_row(category="일식"))
        assert adapter.can_handle(_korean_row(category=" 월식 "))
        assert not adapter.can_handle(_english_row())
        assert not adapter.can_handle(["2024-01-01", "개기"])

    def test_adapt_bc_solar(self) -> None:
        event = KoreanCatalogAdapter().adapt(_korean_row(), line_index=7)
        assert event.year == -3974
        assert (event.month, event.day) == (7, 25)
        assert event.time_str == "16:41:19"
        assert event.category == EclipseCategory.SOLAR
        assert event.kind == EclipseKind.TOTAL
        assert event.category_label == "일식"
        assert event.display_category == "일식"
        assert event.jdn == date_to_jdn(-3974, 7, 25)
        assert event.event_id == f"e-7-{event.jdn}"
        assert event.original_date_str == "-3974-07-25 16:41:19"

    def test_adapt_lunar(self) -> None:
        event = KoreanCatalogAdapter().adapt(_korean_row(category="월식"), line_index=1)
        assert event.category == EclipseCategory.LUNAR

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValueError):
            KoreanCatalogAdapter().adapt(_korean_row(kind="부분"), line_index=1)

    def test_bad_date_rejected(self) -> None:
        with pytest.raises(ValueError):
            KoreanCatalogAdapter().adapt(_korean_row(date="언젠가"), line_index=1)

    def test_impossible_month_rejected(self) -> None:
        with pytest.raises(ValueError):
            KoreanCatalogAdapter().adapt(_korean_row(date="2024-13-01 00:00:00"), line_index=1)

    def test_row_not_mutated(self) -> None:
        row = _korean_row()
        original = list(row)
        KoreanCatalogAdapter().adapt(row, line_index=1)
        assert row == original


class TestEnglishCatalogAdapter:
    def test_labels_case_insensitive(self) -> None:
        event = EnglishCatalogAdapter().adapt(_english_row(kind="Total", category="LUNAR"), 2)
        assert event.category == EclipseCategory.LUNAR
        assert event.kind == EclipseKind.TOTAL

    def test_can_handle(self) -> None:
        adapter = EnglishCatalogAdapter()
        assert adapter.can_handle(_english_row())
        assert not adapter.can_handle(_korean_row())


# ── Registry ─────────────────────────────────────────────────────────────────


class TestAdapterRegistry:
    def test_routes_to_matching_adapter(self) -> None:
        registry = default_registry()
        assert registry.adapt(_korean_row(), 1).category == EclipseCategory.SOLAR
        assert registry.adapt(_english_row(category="lunar"), 2).category == EclipseCategory.LUNAR

    def test_no_adapter_found(self) -> None:
        registry = default_registry()
        with pytest.raises(NoAdapterFoundError) as info:
            registry.adapt(["2024-01-01", "total", "annular"], 4)
        assert info.value.line_index == 4
        assert "annular" in info.value.reason
        assert registry.unmatched == 1
        assert registry.total_rejected == 1

    def test_adaptation_error_wraps_value_error(self) -> None:
        with pytest.raises(AdaptationError) as info:
            default_registry().adapt(_korean_row(date="bad"), 1)
        assert info.value.source_name == "korean_catalog"
        assert isinstance(info.value, RowRejectedError)
        assert isinstance(info.value.__cause__, ValueError)

    def test_stats_track_accepts_and_rejects(self) -> None:
        registry = default_registry()
        registry.adapt(_korean_row(), 1)
        registry.adapt(_english_row(), 2)
        with pytest.raises(AdaptationError):
            registry.adapt(_english_row(date="nope"), 3)
        assert registry.total_accepted == 2
        assert registry.total_rejected == 1
        assert registry.stats == [
            {"source": "korean_catalog", "accepted": 1, "rejected": 0},
            {"source": "english_catalog", "accepted": 1, "rejected": 1},
        ]

    def test_registration_order_decides_selection(self) -> None:
        registry = AdapterRegistry()
        registry.register(EnglishCatalogAdapter())
        registry.register(KoreanCatalogAdapter())
        assert [s["source"] for s in registry.stats] == ["english_catalog", "korean_catalog"]

    def test_duplicate_dialect_rejected(self) -> None:
        registry = default_registry()
        with pytest.raises(ValueError):
            registry.register(KoreanCatalogAdapter())


# ── Catalog loading ──────────────────────────────────────────────────────────


class TestLoadCatalog:
    def test_sorted_by_jdn_with_unique_ids(self) -> None:
        report = load_catalog(_hexagon_csv(2_451_545))
        jdns = [e.jdn for e in report.events]
        assert jdns == sorted(jdns)
        assert len({e.event_id for e in report.events}) == report.event_count == 9
        assert report.skipped_rows == 0

    def test_header_blank_and_short_rows_skipped(self) -> None:
        text = "\n".join([
            _KOREAN_HEADER,
            "",
            "2024-04-08 18:17:16,개기,일식",
            "2024-04-08",
            "언젠가,개기,월식",
            "2025-03-14 06:58:43,개기,월식",
            "2025-03-14 06:58:43,개기,혜성",
        ])
        report = load_catalog(text)
        assert report.event_count == 2
        assert report.skipped_rows == 3

    def test_repeated_header_lines_skipped(self) -> None:
        text = "\n".join(["x", "2024-04-08 18:17:16,total,solar", "date,kind,category"])
        report = load_catalog(text)
        assert report.event_count == 1
        assert report.skipped_rows == 0

    def test_first_line_always_skipped(self) -> None:
        report = load_catalog("2024-04-08 18:17:16,total,solar\n2025-03-14 06:58:43,total,lunar")
        assert report.event_count == 1

    def test_empty_text(self) -> None:
        report = load_catalog("")
        assert report.events == ()
        assert report.skipped_rows == 0

    def test_windows_line_endings(self) -> None:
        text = "date,kind,category\r\n2024-04-08 18:17:16,total,solar\r\n"
        assert load_catalog(text).event_count == 1

    def test_custom_registry(self) -> None:
        registry = AdapterRegistry()
        registry.register(EnglishCatalogAdapter())
        report = load_catalog(_hexagon_csv(2_451_545), registry)
        assert report.event_count == 0
        assert report.skipped_rows == 9

    def test_loaded_bc_catalog_yields_pattern(self) -> None:
        """A hexagon straddling 1 BC / AD 1 is found from raw rows."""
        center = date_to_jdn(1, 1, 1)
        report = load_catalog(_hexagon_csv(center))
        assert report.events[0].year < 1

        patterns = PatternSearchEngine().search_all(report.events)

        assert len(patterns) == 1
        assert patterns[0].center.jdn == center
        assert patterns[0].center.full_date == "AD 1-01-01"
