"""Analyse des profits et pertes."""

from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd

from raidstats.analysis.frame import raids_to_frame
from raidstats.models import LootAnalysis, LootBucket, Raid


def _mean(total: float, count: int) -> float:
    return total / count if count else 0.0


def _loot_buckets(wins: pd.DataFrame, key: str) -> Dict[str, LootBucket]:
    """Profit par valeur de `key`, dans l'ordre d'apparition."""
    out: Dict[str, LootBucket] = {}
    for label, g in wins.groupby(key, sort=False):
        total = float(g["profit"].sum())
        count = int(len(g))
        out[str(label)] = LootBucket(avg_loot=_mean(total, count), total_loot=total, count=count)
    return out


def compute_loot_analysis(raids: Sequence[Raid]) -> LootAnalysis:
    """Calcule les agrégats de profit / perte.

    - Profit : raids réussis dont le profit est résolu (ancien format inclus).
    - Perte : raids ratés avec une valeur emportée renseignée. Les pertes
      issues de l'ancien champ `inventory_value` ne sont pas comptées ici.
    - Profit par minute : raids réussis avec durée > 0 et profit connu.

    Args:
        raids: Raids (ordre quelconque).

    Returns:
        LootAnalysis ; tous les agrégats valent 0 sans données exploitables.
    """
    df = raids_to_frame(raids)
    wins = df.loc[df["successful"] & df["profit"].notna()]
    losses = df.loc[~df["successful"] & df["bring_in_value"].notna()]

    total_loot = float(wins["profit"].sum()) if not wins.empty else 0.0
    total_loss = float(losses["bring_in_value"].sum()) if not losses.empty else 0.0

    timed = wins.loc[wins["duration"] > 0]
    minutes = float(timed["duration"].sum()) if not timed.empty else 0.0
    loot_per_minute = float(timed["profit"].sum()) / minutes if minutes > 0 else 0.0

    return LootAnalysis(
        total_loot=total_loot,
        total_loss=total_loss,
        avg_loot_on_win=_mean(total_loot, len(wins)),
        avg_loss_on_death=_mean(total_loss, len(losses)),
        loot_per_minute=loot_per_minute,
        by_map=_loot_buckets(wins, "map"),
        by_condition=_loot_buckets(wins, "condition"),
    )
