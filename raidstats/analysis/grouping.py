"""Regroupement des raids et statistiques par groupe.

Toutes les vues (jour, heure, escouade, coéquipier, carte, condition,
spawn, durée) reposent sur la même primitive `group_by` : un classifieur
associe à chaque raid un libellé, une liste de libellés ou None (raid exclu),
puis chaque groupe est agrégé en StatGroup.
"""

from __future__ import annotations

from functools import partial
from itertools import combinations
from typing import Callable, List, Literal, Optional, Sequence, Union

import pandas as pd

from raidstats.analysis.frame import raids_to_frame
from raidstats.config import (
    BRACKETS,
    COMBO_SEPARATOR,
    MIN_COMBO_RAIDS,
    Bracket,
    get_display_timezone,
    normalize_condition,
)
from raidstats.formatting import to_local_naive
from raidstats.models import Raid, StatGroup

GroupKey = Union[str, List[str], None]
Classifier = Callable[[Raid], GroupKey]
SortKey = Literal["total", "success_rate"]


# =============================================================================
# Primitive générique
# =============================================================================


def make_stat_group(label: str, g: pd.DataFrame) -> StatGroup:
    """Agrège un groupe de lignes (cf. raids_to_frame) en StatGroup.

    Le profit n'est compté que sur les raids réussis dont le profit est connu.
    """
    total = int(len(g))
    successful = int(g["successful"].sum())
    profits = g.loc[g["successful"] & g["profit"].notna(), "profit"]
    total_loot = float(profits.sum()) if not profits.empty else 0.0
    return StatGroup(
        label=str(label),
        total=total,
        successful=successful,
        success_rate=successful * 100.0 / total if total else 0.0,
        avg_loot=total_loot / len(profits) if len(profits) else 0.0,
        total_loot=total_loot,
    )


def group_by(
    raids: Sequence[Raid],
    classifier: Classifier,
    order: Optional[Sequence[str]] = None,
    sort_by: Optional[SortKey] = None,
    min_total: int = 1,
) -> List[StatGroup]:
    """Regroupe les raids selon un classifieur et agrège chaque groupe.

    Args:
        raids: Raids (ordre quelconque, l'ordre d'apparition départage les égalités).
        classifier: Raid -> libellé, liste de libellés (un raid compte dans
            plusieurs groupes) ou None (raid exclu).
        order: Ordre d'affichage fixe ; les libellés absents de `order` sont ignorés.
        sort_by: Tri décroissant sur "total" ou "success_rate" (si pas d'`order`).
        min_total: Nombre minimum de raids pour qu'un groupe soit retourné.

    Returns:
        Liste de StatGroup, sans groupe vide.
    """
    if not raids:
        return []

    df = raids_to_frame(raids)
    df["group_key"] = pd.Series([classifier(r) for r in raids], index=df.index, dtype=object)
    df = df.explode("group_key")
    df = df.loc[df["group_key"].notna()]
    if df.empty:
        return []

    groups = [make_stat_group(label, g) for label, g in df.groupby("group_key", sort=False)]
    groups = [g for g in groups if g.total >= max(1, min_total)]

    if order is not None:
        rank = {label: i for i, label in enumerate(order)}
        return sorted((g for g in groups if g.label in rank), key=lambda g: rank[g.label])
    if sort_by is not None:
        groups.sort(key=lambda g: getattr(g, sort_by), reverse=True)
    return groups


# =============================================================================
# Classifieurs
# =============================================================================


def _find_bracket(value: float | None, brackets: Sequence[Bracket]) -> Optional[str]:
    if value is None:
        return None
    for b in brackets:
        if b.contains(value):
            return b.label
    return None


def classify_day_of_week(raid: Raid, tz_name: str | None = None) -> str:
    local = to_local_naive(raid.created_at, tz_name)
    # weekday(): lundi=0 ; les libellés commencent au dimanche
    return BRACKETS.day_labels[(local.weekday() + 1) % 7]


def classify_time_of_day(raid: Raid, tz_name: str | None = None) -> Optional[str]:
    hour = to_local_naive(raid.created_at, tz_name).hour
    for label, start, end in BRACKETS.time_of_day:
        if start <= hour < end:
            return label
    return None


def classify_squad_size(raid: Raid) -> Optional[str]:
    return _find_bracket(raid.squad_size, BRACKETS.squad_size)


def classify_teammates(raid: Raid) -> List[str]:
    return list(raid.teammates)


def classify_teammate_pairs(raid: Raid) -> List[str]:
    """Toutes les paires de coéquipiers du raid, libellé indépendant de l'ordre."""
    return [
        COMBO_SEPARATOR.join(sorted(pair))
        for pair in combinations(raid.teammates, 2)
    ]


def classify_map(raid: Raid) -> str:
    return raid.map


def classify_condition(raid: Raid) -> str:
    return normalize_condition(raid.map_condition)


def classify_spawn_bracket(raid: Raid) -> Optional[str]:
    return _find_bracket(raid.raid_start_mins, BRACKETS.spawn)


def classify_duration_bracket(raid: Raid) -> Optional[str]:
    return _find_bracket(raid.raid_duration_mins, BRACKETS.duration)


# =============================================================================
# Vues
# =============================================================================


def _resolve_tz(tz_name: str | None) -> str | None:
    return tz_name if tz_name is not None else get_display_timezone()


def stats_by_day_of_week(raids: Sequence[Raid], tz_name: str | None = None) -> List[StatGroup]:
    """Statistiques par jour de la semaine (dimanche -> samedi)."""
    classifier = partial(classify_day_of_week, tz_name=_resolve_tz(tz_name))
    return group_by(raids, classifier, order=BRACKETS.day_labels)


def stats_by_time_of_day(raids: Sequence[Raid], tz_name: str | None = None) -> List[StatGroup]:
    """Statistiques par tranche horaire (matin, après-midi, soir, nuit)."""
    classifier = partial(classify_time_of_day, tz_name=_resolve_tz(tz_name))
    return group_by(raids, classifier, order=[label for label, _, _ in BRACKETS.time_of_day])


def stats_by_squad_size(raids: Sequence[Raid]) -> List[StatGroup]:
    return group_by(raids, classify_squad_size, order=[b.label for b in BRACKETS.squad_size])


def stats_by_teammate(raids: Sequence[Raid]) -> List[StatGroup]:
    """Statistiques par coéquipier, les plus joués en premier."""
    return group_by(raids, classify_teammates, sort_by="total")


def teammate_combos(raids: Sequence[Raid]) -> List[StatGroup]:
    """Statistiques par paire de coéquipiers.

    Seules les paires vues sur au moins MIN_COMBO_RAIDS raids sont gardées,
    triées par taux de réussite décroissant.
    """
    return group_by(
        raids,
        classify_teammate_pairs,
        sort_by="success_rate",
        min_total=MIN_COMBO_RAIDS,
    )


def stats_by_map(raids: Sequence[Raid]) -> List[StatGroup]:
    return group_by(raids, classify_map, sort_by="total")


def stats_by_condition(raids: Sequence[Raid]) -> List[StatGroup]:
    return group_by(raids, classify_condition, sort_by="total")


def stats_by_spawn_bracket(raids: Sequence[Raid]) -> List[StatGroup]:
    """Statistiques par moment d'entrée dans le raid (raids sans valeur exclus)."""
    return group_by(raids, classify_spawn_bracket, order=[b.label for b in BRACKETS.spawn])


def stats_by_duration(raids: Sequence[Raid]) -> List[StatGroup]:
    """Statistiques par durée de raid (raids sans durée exclus)."""
    return group_by(raids, classify_duration_bracket, order=[b.label for b in BRACKETS.duration])
