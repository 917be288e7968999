"""Tests pour les statistiques globales, la recherche et le rapport."""

import json

import pytest

from raidstats.analysis.report import build_stats_report
from raidstats.analysis.search import STAT_SECTIONS, search_sections
from raidstats.analysis.stats import compute_avg_duration_by_outcome, compute_overview_stats

ALL_SECTIONS = ["overview", "time", "squad", "map", "condition", "spawn", "duration", "loot"]


class TestComputeOverviewStats:
    """Tests pour compute_overview_stats."""

    def test_normal_values(self, make_raid):
        raids = [
            make_raid(True, squad_kills=2),
            make_raid(False, squad_kills=None),
            make_raid(True, squad_kills=3),
            make_raid(False),
        ]
        stats = compute_overview_stats(raids)
        assert stats.total == 4
        assert stats.successful == 2
        assert stats.failed == 2
        assert stats.success_rate == pytest.approx(50.0)
        assert stats.total_kills == 5

    def test_empty(self):
        stats = compute_overview_stats([])
        assert stats.total == 0
        assert stats.success_rate == 0.0


class TestAvgDurationByOutcome:
    """Tests pour compute_avg_duration_by_outcome."""

    def test_normal_values(self, make_raid):
        raids = [
            make_raid(True, raid_duration_mins=20),
            make_raid(True, raid_duration_mins=30),
            make_raid(False, raid_duration_mins=8),
            make_raid(False),
        ]
        avg = compute_avg_duration_by_outcome(raids)
        assert avg.win == pytest.approx(25.0)
        assert avg.loss == pytest.approx(8.0)

    def test_missing_outcome(self, make_raid):
        avg = compute_avg_duration_by_outcome([make_raid(True, raid_duration_mins=12)])
        assert avg.win == pytest.approx(12.0)
        assert avg.loss == 0.0

    def test_empty(self):
        avg = compute_avg_duration_by_outcome([])
        assert (avg.win, avg.loss) == (0.0, 0.0)


class TestSearchSections:
    """Tests pour search_sections."""

    def test_catalog(self):
        assert [s.id for s in STAT_SECTIONS] == ALL_SECTIONS

    def test_empty_query_returns_all(self):
        assert search_sections("") == ALL_SECTIONS
        assert search_sections("   ") == ALL_SECTIONS

    def test_map(self):
        assert "map" in search_sections("map")

    def test_title_is_case_insensitive(self):
        assert search_sections("PROFIT") == ["loot"]

    def test_keyword_substring(self):
        """'time' apparaît dans les mots-clés de plusieurs sections."""
        assert search_sections("time") == ["time", "spawn", "duration"]
        assert search_sections("night") == ["time", "condition"]

    def test_multi_word_keyword(self):
        assert search_sections("gate") == ["map", "condition"]

    def test_no_match(self):
        assert search_sections("zzz") == []


class TestBuildStatsReport:
    """Tests pour build_stats_report."""

    def test_all_sections(self, make_raid):
        raids = [make_raid(True, extract_value=1000, teammates=["A"]), make_raid(False)]
        report = build_stats_report(raids, tz_name="UTC")
        assert list(report) == ALL_SECTIONS
        assert report["overview"]["summary"]["total"] == 2
        assert report["overview"]["streaks"]["current"]["type"] == "win"
        assert report["loot"]["total_loot"] == pytest.approx(1000)

    def test_filtered_by_query(self, make_raid):
        report = build_stats_report([make_raid(map="Blue Gate")], query="map")
        assert list(report) == ["map"]
        assert report["map"]["by_map"][0]["label"] == "Blue Gate"

    def test_json_serializable(self, make_raid):
        raids = [make_raid(True, map_condition="Cold Snap", extract_value=2500, raid_duration_mins=10)]
        json.dumps(build_stats_report(raids, tz_name="UTC"))

    def test_empty(self):
        report = build_stats_report([])
        assert report["overview"]["summary"]["total"] == 0
        assert report["squad"]["combos"] == []
