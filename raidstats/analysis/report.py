"""Assemblage du rapport de statistiques par section."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable, Dict, Sequence

from raidstats.analysis.grouping import (
    stats_by_condition,
    stats_by_day_of_week,
    stats_by_duration,
    stats_by_map,
    stats_by_spawn_bracket,
    stats_by_squad_size,
    stats_by_teammate,
    stats_by_time_of_day,
    teammate_combos,
)
from raidstats.analysis.loot import compute_loot_analysis
from raidstats.analysis.search import search_sections
from raidstats.analysis.stats import compute_avg_duration_by_outcome, compute_overview_stats
from raidstats.analysis.streaks import compute_streaks
from raidstats.analysis.trend import compute_performance_trend
from raidstats.models import Raid


def _groups(groups) -> list[dict[str, Any]]:
    return [asdict(g) for g in groups]


def _overview(raids: Sequence[Raid], tz_name: str | None) -> Dict[str, Any]:
    return {
        "summary": asdict(compute_overview_stats(raids)),
        "streaks": asdict(compute_streaks(raids)),
    }


def _time(raids: Sequence[Raid], tz_name: str | None) -> Dict[str, Any]:
    return {
        "by_day_of_week": _groups(stats_by_day_of_week(raids, tz_name)),
        "by_time_of_day": _groups(stats_by_time_of_day(raids, tz_name)),
        "trend": asdict(compute_performance_trend(raids)),
    }


def _squad(raids: Sequence[Raid], tz_name: str | None) -> Dict[str, Any]:
    return {
        "by_squad_size": _groups(stats_by_squad_size(raids)),
        "by_teammate": _groups(stats_by_teammate(raids)),
        "combos": _groups(teammate_combos(raids)),
    }


def _map(raids: Sequence[Raid], tz_name: str | None) -> Dict[str, Any]:
    return {"by_map": _groups(stats_by_map(raids))}


def _condition(raids: Sequence[Raid], tz_name: str | None) -> Dict[str, Any]:
    return {"by_condition": _groups(stats_by_condition(raids))}


def _spawn(raids: Sequence[Raid], tz_name: str | None) -> Dict[str, Any]:
    return {"by_spawn_bracket": _groups(stats_by_spawn_bracket(raids))}


def _duration(raids: Sequence[Raid], tz_name: str | None) -> Dict[str, Any]:
    return {
        "by_duration": _groups(stats_by_duration(raids)),
        "avg_by_outcome": asdict(compute_avg_duration_by_outcome(raids)),
    }


def _loot(raids: Sequence[Raid], tz_name: str | None) -> Dict[str, Any]:
    return asdict(compute_loot_analysis(raids))


SECTION_BUILDERS: Dict[str, Callable[[Sequence[Raid], str | None], Dict[str, Any]]] = {
    "overview": _overview,
    "time": _time,
    "squad": _squad,
    "map": _map,
    "condition": _condition,
    "spawn": _spawn,
    "duration": _duration,
    "loot": _loot,
}


def build_stats_report(
    raids: Sequence[Raid],
    query: str = "",
    tz_name: str | None = None,
) -> Dict[str, Dict[str, Any]]:
    """Calcule les sections de statistiques retenues par la recherche.

    Args:
        raids: Raids, du plus récent au plus ancien.
        query: Recherche libre (vide = toutes les sections).
        tz_name: Fuseau pour les vues par jour / heure.

    Returns:
        {section_id: valeurs sérialisables en JSON}, dans l'ordre du catalogue.
    """
    return {
        section_id: SECTION_BUILDERS[section_id](raids, tz_name)
        for section_id in search_sections(query)
    }
