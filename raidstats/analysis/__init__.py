"""Module d'analyse des raids."""

from raidstats.analysis.profit import (
    effective_profit,
    effective_loss,
    resolve_profit,
    resolve_loss,
)
from raidstats.analysis.frame import raids_to_frame
from raidstats.analysis.streaks import compute_streaks
from raidstats.analysis.trend import compute_performance_trend
from raidstats.analysis.grouping import (
    group_by,
    stats_by_day_of_week,
    stats_by_time_of_day,
    stats_by_squad_size,
    stats_by_teammate,
    teammate_combos,
    stats_by_map,
    stats_by_condition,
    stats_by_spawn_bracket,
    stats_by_duration,
)
from raidstats.analysis.loot import compute_loot_analysis
from raidstats.analysis.stats import (
    compute_overview_stats,
    compute_avg_duration_by_outcome,
)
from raidstats.analysis.search import STAT_SECTIONS, search_sections
from raidstats.analysis.report import build_stats_report

__all__ = [
    "effective_profit",
    "effective_loss",
    "resolve_profit",
    "resolve_loss",
    "raids_to_frame",
    "compute_streaks",
    "compute_performance_trend",
    "group_by",
    "stats_by_day_of_week",
    "stats_by_time_of_day",
    "stats_by_squad_size",
    "stats_by_teammate",
    "teammate_combos",
    "stats_by_map",
    "stats_by_condition",
    "stats_by_spawn_bracket",
    "stats_by_duration",
    "compute_loot_analysis",
    "compute_overview_stats",
    "compute_avg_duration_by_outcome",
    "STAT_SECTIONS",
    "search_sections",
    "build_stats_report",
]
