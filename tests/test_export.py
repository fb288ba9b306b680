"""Tests for CSV export and the plain-text pattern formatter."""

from __future__ import annotations

import csv
import io
from datetime import date

from celestial_hexagon.adapters.catalog import load_catalog
from celestial_hexagon.core.pattern_engine import PatternSearchEngine, SearchConfig
from celestial_hexagon.domain.pattern import HexagonalPattern
from celestial_hexagon.explain.formatter import PatternFormatter
from celestial_hexagon.export.csv_export import (
    BOM,
    csv_headers,
    export_filename,
    patterns_to_csv,
)

from tests.test_adapters import _hexagon_csv
from tests.test_event import _events
from tests.test_pattern_engine import _CENTER, _hexagon_catalog


def _pattern() -> HexagonalPattern:
    return PatternSearchEngine().search_all(_hexagon_catalog())[0]


def _rows(text: str) -> list[list[str]]:
    assert text.startswith(BOM)
    return list(csv.reader(io.StringIO(text[len(BOM):])))


class TestCsvExport:
    def test_headers(self) -> None:
        headers = csv_headers()
        assert headers[:3] == ["Pattern ID", "Center Date", "Center Type"]
        assert headers[3:6] == ["Pair A (L Date)", "Pair A (R Date)", "Pair A (Avg Dist)"]
        assert headers[-1] == "Pair D (Avg Dist)"
        assert len(headers) == 15

    def test_empty_export_has_header_only(self) -> None:
        rows = _rows(patterns_to_csv([]))
        assert rows == [csv_headers()]

    def test_pattern_row(self) -> None:
        pattern = _pattern()
        rows = _rows(patterns_to_csv([pattern, pattern]))
        assert len(rows) == 3
        first = rows[1]
        assert first[0] == "#1"
        assert rows[2][0] == "#2"
        assert first[1] == pattern.center.full_date
        assert first[2] == "solar"
        assert first[5] == "1211.5"
        assert first[3] == pattern.pairs[0].left.full_date
        assert first[4] == pattern.pairs[0].right.full_date
        assert first[14] == "517.0"

    def test_center_type_uses_source_label(self) -> None:
        report = load_catalog(_hexagon_csv(2_451_545))
        patterns = PatternSearchEngine().search_all(report.events)
        rows = _rows(patterns_to_csv(patterns))
        assert rows[1][2] == "월식"

    def test_missing_pairs_left_blank(self) -> None:
        engine = PatternSearchEngine(SearchConfig(target_distances=(517,), tolerance_days=0))
        pattern = engine.search_center(_events(0, 517, 1034), 1)
        row = _rows(patterns_to_csv([pattern]))[1]
        assert len(row) == 15
        assert row[5] == "517.0"
        assert row[6:] == [""] * 9

    def test_filename(self) -> None:
        assert export_filename("1.5.0", date(2026, 10, 19)) == "eclipse_patterns_v1.5.0_2026-10-19.csv"


class TestPatternFormatter:
    def test_timeline_sorted_with_roles(self) -> None:
        timeline = PatternFormatter.timeline(_pattern())
        assert [e.event.jdn for e in timeline] == sorted(e.event.jdn for e in timeline)
        roles = [e.role for e in timeline]
        assert roles == ["L0", "L1", "L2", "L3", "Center", "R3", "R2", "R1", "R0"]

    def test_timeline_offsets_relative_to_center(self) -> None:
        timeline = PatternFormatter.timeline(_pattern())
        offsets = {e.role: e.offset_days for e in timeline}
        assert offsets["Center"] == 0
        assert offsets["L0"] == -1211
        assert offsets["R0"] == 1212
        assert offsets["R3"] == 517

    def test_total_span(self) -> None:
        assert PatternFormatter.total_span_days(_pattern()) == 1211 + 1212

    def test_format_plain_mentions_members(self) -> None:
        pattern = _pattern()
        text = PatternFormatter.format_plain(pattern)
        assert text.startswith("Center: ")
        assert f"Score: {pattern.score:.2f}" in text
        assert "avg 1211.5, diff 1" in text
        assert "+1212d" in text
        assert "Center" in text


class TestPatternRanking:
    def test_ranked_by_score_descending(self) -> None:
        perfect = PatternSearchEngine().search_all(_hexagon_catalog(right_1211_offset=1211))[0]
        imperfect = _pattern()
        assert HexagonalPattern.ranked([imperfect, perfect]) == [perfect, imperfect]

    def test_event_ids_center_first(self) -> None:
        pattern = _pattern()
        ids = pattern.event_ids()
        assert ids[0] == pattern.center.event_id
        assert len(ids) == 9
        assert pattern.center.jdn == _CENTER
