"""Conversion des raids en DataFrame pour les agrégations."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from raidstats.analysis.profit import effective_profit
from raidstats.config import normalize_condition
from raidstats.models import Raid

FRAME_COLUMNS = [
    "id",
    "successful",
    "map",
    "condition",
    "profit",
    "bring_in_value",
    "duration",
    "kills",
]

_NUMERIC_COLUMNS = ("profit", "bring_in_value", "duration", "kills")


def raids_to_frame(raids: Sequence[Raid]) -> pd.DataFrame:
    """Construit un DataFrame (une ligne par raid, ordre conservé).

    La colonne `profit` passe par le normaliseur et `condition` est déjà
    ramenée à sa clé de regroupement ("Normal" si absente).

    Args:
        raids: Raids, du plus récent au plus ancien.

    Returns:
        DataFrame avec les colonnes FRAME_COLUMNS (NaN pour les valeurs absentes).
    """
    rows = [
        {
            "id": raid.id,
            "successful": bool(raid.successful),
            "map": raid.map,
            "condition": normalize_condition(raid.map_condition),
            "profit": effective_profit(raid),
            "bring_in_value": raid.bring_in_value,
            "duration": raid.raid_duration_mins,
            "kills": raid.squad_kills,
        }
        for raid in raids
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["successful"] = df["successful"].astype(bool)
    for col in _NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
    return df
