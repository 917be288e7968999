"""Modèles de données (dataclasses) du projet."""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Dict, Literal, Optional, Tuple


StreakType = Literal["win", "loss", "none"]
TrendLabel = Literal["improving", "declining", "stable"]


@dataclass(frozen=True)
class RaidInput:
    """Données saisies pour un raid, avant attribution d'un id et d'une date.

    Attributes:
        successful: True si le joueur a extrait.
        map: Nom de la carte (cf. config.MAPS).
        map_condition: Condition de la carte, None = "Normal".
        teammates: Pseudos des coéquipiers, dans l'ordre de saisie.
        bring_in_value: Valeur emportée dans le raid (perte potentielle).
        extract_value: Valeur extraite (seulement si succès).
        inventory_value: Ancien champ unique, conservé pour les vieilles données.
        raid_duration_mins: Durée du raid en minutes.
        raid_start_mins: Compte à rebours en jeu au moment de l'entrée.
        squad_kills: Nombre d'éliminations de l'escouade.
    """
    successful: bool
    map: str
    map_condition: Optional[str] = None
    teammates: Tuple[str, ...] = ()
    bring_in_value: Optional[float] = None
    extract_value: Optional[float] = None
    inventory_value: Optional[float] = None
    raid_duration_mins: Optional[float] = None
    raid_start_mins: Optional[float] = None
    squad_kills: Optional[int] = None


@dataclass(frozen=True)
class Raid:
    """Un raid enregistré.

    Mêmes champs que RaidInput, plus l'identifiant et la date de création
    attribués par le stockage. Les raids circulent du plus récent au plus
    ancien (tri par created_at décroissant).
    """
    id: str
    created_at: datetime
    successful: bool
    map: str
    map_condition: Optional[str] = None
    teammates: Tuple[str, ...] = ()
    bring_in_value: Optional[float] = None
    extract_value: Optional[float] = None
    inventory_value: Optional[float] = None
    raid_duration_mins: Optional[float] = None
    raid_start_mins: Optional[float] = None
    squad_kills: Optional[int] = None

    @classmethod
    def from_input(cls, data: RaidInput, raid_id: str, created_at: datetime) -> "Raid":
        values = {f.name: getattr(data, f.name) for f in fields(data)}
        return cls(id=raid_id, created_at=created_at, **values)

    @property
    def squad_size(self) -> int:
        return len(self.teammates)


@dataclass(frozen=True)
class Teammate:
    """Coéquipier connu (unique par pseudo, sans tenir compte de la casse)."""
    username: str
    last_played: datetime


# =============================================================================
# Résolution profit / perte
# =============================================================================

class ProfitSource(str, Enum):
    """Origine d'une valeur de profit."""
    EXTRACT_MINUS_BRING_IN = "extract_minus_bring_in"
    EXTRACT_ONLY = "extract_only"
    LEGACY_INVENTORY = "legacy_inventory"


class LossSource(str, Enum):
    """Origine d'une valeur de perte."""
    BRING_IN = "bring_in"
    LEGACY_INVENTORY = "legacy_inventory"


@dataclass(frozen=True)
class ProfitResolution:
    """Valeur résolue et règle qui l'a produite."""
    value: float
    source: ProfitSource | LossSource


# =============================================================================
# Vues dérivées
# =============================================================================

@dataclass(frozen=True)
class StatGroup:
    """Statistiques d'un groupe de raids.

    Attributes:
        label: Libellé du groupe (jour, carte, coéquipier...).
        total: Nombre de raids du groupe.
        successful: Nombre d'extractions réussies.
        success_rate: Taux de réussite en pourcentage (0-100).
        avg_loot: Profit moyen sur les succès avec profit connu.
        total_loot: Profit cumulé sur ces mêmes succès.
    """
    label: str
    total: int
    successful: int
    success_rate: float
    avg_loot: float
    total_loot: float


@dataclass(frozen=True)
class CurrentStreak:
    type: StreakType
    count: int


@dataclass(frozen=True)
class StreakData:
    """Série en cours et records historiques."""
    current: CurrentStreak
    best_win: int
    worst_loss: int


@dataclass(frozen=True)
class PerformanceTrend:
    """Comparaison des 10 derniers raids avec l'ensemble.

    Attributes:
        recent: Taux de réussite sur les derniers raids (0-100).
        overall: Taux de réussite global (0-100).
        trend: "improving", "declining" ou "stable".
    """
    recent: float
    overall: float
    trend: TrendLabel


@dataclass(frozen=True)
class LootBucket:
    avg_loot: float
    total_loot: float
    count: int


@dataclass(frozen=True)
class LootAnalysis:
    """Analyse des profits et pertes.

    Attributes:
        total_loot: Profit cumulé des extractions.
        total_loss: Valeur emportée cumulée sur les morts.
        avg_loot_on_win: Profit moyen par extraction.
        avg_loss_on_death: Perte moyenne par mort.
        loot_per_minute: Profit par minute de raid.
        by_map: Profit par carte.
        by_condition: Profit par condition.
    """
    total_loot: float
    total_loss: float
    avg_loot_on_win: float
    avg_loss_on_death: float
    loot_per_minute: float
    by_map: Dict[str, LootBucket]
    by_condition: Dict[str, LootBucket]


@dataclass(frozen=True)
class OverviewStats:
    total: int = 0
    successful: int = 0
    failed: int = 0
    success_rate: float = 0.0
    total_kills: int = 0


@dataclass(frozen=True)
class DurationByOutcome:
    """Durée moyenne (minutes) des raids réussis / ratés."""
    win: float = 0.0
    loss: float = 0.0


@dataclass(frozen=True)
class SearchableSection:
    id: str
    title: str
    keywords: Tuple[str, ...]
