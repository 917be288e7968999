"""Tendance de performance : derniers raids vs historique complet."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from raidstats.analysis.frame import raids_to_frame
from raidstats.config import TREND_CONFIG
from raidstats.models import PerformanceTrend, Raid, TrendLabel


def _success_rate(df: pd.DataFrame) -> float:
    if df.empty:
        return 0.0
    return int(df["successful"].sum()) * 100.0 / len(df)


def compute_performance_trend(raids: Sequence[Raid]) -> PerformanceTrend:
    """Compare le taux de réussite récent au taux global.

    Les raids sont supposés du plus récent au plus ancien : `recent` porte
    sur les TREND_CONFIG.recent_window premiers. En dessous de
    TREND_CONFIG.min_raids raids, la tendance reste "stable".

    Args:
        raids: Raids, du plus récent au plus ancien.

    Returns:
        PerformanceTrend (taux en pourcentage).
    """
    df = raids_to_frame(raids)
    overall = _success_rate(df)
    recent = _success_rate(df.head(TREND_CONFIG.recent_window))

    trend: TrendLabel = "stable"
    if len(df) >= TREND_CONFIG.min_raids:
        diff = recent - overall
        if diff > TREND_CONFIG.threshold_points:
            trend = "improving"
        elif diff < -TREND_CONFIG.threshold_points:
            trend = "declining"

    return PerformanceTrend(recent=recent, overall=overall, trend=trend)
