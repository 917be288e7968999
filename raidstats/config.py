"""Configuration centralisée et constantes du projet."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple


def get_repo_root(start_path: str | None = None) -> str:
    """Retourne le répertoire racine du repo.

    Objectif: éviter les chemins faux quand le script est lancé depuis
    un autre dossier.
    """

    def _as_dir(p: Path) -> Path:
        try:
            p = p.resolve()
        except OSError:
            pass
        return p.parent if p.is_file() else p

    def _looks_like_repo_root(p: Path) -> bool:
        return (p / "pyproject.toml").exists() and (p / "raidstats").is_dir()

    starts: list[Path] = []
    if start_path:
        starts.append(_as_dir(Path(start_path)))
    starts.append(_as_dir(Path(__file__)))
    starts.append(Path.cwd())

    for s in starts:
        for p in [s] + list(s.parents)[:8]:
            if _looks_like_repo_root(p):
                return str(p)

    return str(starts[0])


# =============================================================================
# Chemins par défaut
# =============================================================================

def get_default_db_path() -> str:
    """Retourne le chemin de la base SQLite des raids.

    `RAIDSTATS_DB` permet de surcharger le chemin (utile en tests / Docker).
    """
    override = (os.environ.get("RAIDSTATS_DB") or "").strip()
    if override:
        return override
    return os.path.join(get_repo_root(), "raids.db")


def get_display_timezone() -> str | None:
    """Fuseau utilisé pour les regroupements par jour / heure.

    None = heure locale du système.
    """
    tz = (os.environ.get("RAIDSTATS_TIMEZONE") or "").strip()
    return tz or None


# =============================================================================
# Catalogue des cartes et conditions
# =============================================================================

MAPS: Tuple[str, ...] = (
    "Dam Battlegrounds",
    "Buried City",
    "Spaceport",
    "Stella Montis",
    "Blue Gate",
)

DEFAULT_CONDITION = "Normal"

UNIVERSAL_CONDITIONS: Tuple[str, ...] = (
    "Normal",
    "Cold Snap",
    "Night Raid",
    "Electromagnetic Storm",
)

MAP_SPECIFIC_CONDITIONS: Dict[str, Tuple[str, ...]] = {
    "Spaceport": ("Hidden Bunker",),
    "Blue Gate": ("Locked Gate",),
}


def get_conditions_for_map(map_name: str) -> List[str]:
    """Conditions disponibles pour une carte (communes + spécifiques)."""
    return [*UNIVERSAL_CONDITIONS, *MAP_SPECIFIC_CONDITIONS.get(map_name, ())]


def normalize_condition(condition: str | None) -> str:
    """Clé de regroupement d'une condition (absente -> "Normal")."""
    return condition or DEFAULT_CONDITION


# =============================================================================
# Tranches de regroupement
# =============================================================================

@dataclass(frozen=True)
class Bracket:
    """Intervalle fermé [low, high] associé à un libellé."""
    label: str
    low: float
    high: float

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


@dataclass(frozen=True)
class BracketConfig:
    """Tranches fixes utilisées par le moteur de regroupement.

    Les heures sont des intervalles semi-ouverts [start, end) ; les autres
    tranches sont fermées des deux côtés.
    """
    day_labels: Tuple[str, ...] = (
        "Sunday",
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
    )
    time_of_day: Tuple[Tuple[str, int, int], ...] = (
        ("Morning (6am-12pm)", 6, 12),
        ("Afternoon (12pm-6pm)", 12, 18),
        ("Evening (6pm-12am)", 18, 24),
        ("Night (12am-6am)", 0, 6),
    )
    squad_size: Tuple[Bracket, ...] = (
        Bracket("Solo", 0, 0),
        Bracket("Duo", 1, 1),
        Bracket("Trio", 2, 2),
        Bracket("Full Squad", 3, 10),
    )
    spawn: Tuple[Bracket, ...] = (
        Bracket("Early (30-25m)", 25, 30),
        Bracket("Mid-Early (24-20m)", 20, 24),
        Bracket("Mid (19-15m)", 15, 19),
        Bracket("Mid-Late (14-10m)", 10, 14),
        Bracket("Late (under 10m)", 0, 9),
    )
    duration: Tuple[Bracket, ...] = (
        Bracket("Quick (under 10m)", 0, 9),
        Bracket("Medium (10-20m)", 10, 20),
        Bracket("Long (20m+)", 21, 999),
    )


BRACKETS = BracketConfig()

COMBO_SEPARATOR = " + "
MIN_COMBO_RAIDS = 2


# =============================================================================
# Tendance
# =============================================================================

@dataclass(frozen=True)
class TrendConfig:
    """Paramètres de l'analyse de tendance."""
    recent_window: int = 10
    min_raids: int = 10
    threshold_points: float = 10.0


TREND_CONFIG = TrendConfig()
