"""Calcul des statistiques globales."""

from typing import Sequence

from raidstats.analysis.frame import raids_to_frame
from raidstats.models import DurationByOutcome, OverviewStats, Raid


def compute_overview_stats(raids: Sequence[Raid]) -> OverviewStats:
    """Agrège les totaux d'une liste de raids.

    Args:
        raids: Raids (ordre quelconque).

    Returns:
        OverviewStats (taux de réussite en pourcentage).
    """
    if not raids:
        return OverviewStats()

    df = raids_to_frame(raids)
    total = len(df)
    successful = int(df["successful"].sum())
    return OverviewStats(
        total=total,
        successful=successful,
        failed=total - successful,
        success_rate=successful * 100.0 / total,
        total_kills=int(df["kills"].fillna(0).sum()),
    )


def compute_avg_duration_by_outcome(raids: Sequence[Raid]) -> DurationByOutcome:
    """Durée moyenne des raids réussis et ratés (raids sans durée ignorés).

    Returns:
        DurationByOutcome, 0 pour un résultat sans aucune durée.
    """
    df = raids_to_frame(raids)
    timed = df.loc[df["duration"].notna()]
    if timed.empty:
        return DurationByOutcome()

    win = timed.loc[timed["successful"], "duration"]
    loss = timed.loc[~timed["successful"], "duration"]
    return DurationByOutcome(
        win=float(win.mean()) if not win.empty else 0.0,
        loss=float(loss.mean()) if not loss.empty else 0.0,
    )
