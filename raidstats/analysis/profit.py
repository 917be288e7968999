"""Résolution du profit et de la perte d'un raid.

Point d'entrée unique pour toute agrégation de valeurs : les anciens raids
n'ont qu'un champ `inventory_value`, réinterprété comme profit (extraction)
ou comme perte (mort) quand les champs récents sont absents.

Ordre de résolution du profit (raids réussis uniquement) :
1. extract_value - bring_in_value
2. extract_value seul (rien emporté)
3. inventory_value (ancien format)

Ordre de résolution de la perte (raids ratés uniquement) :
1. bring_in_value
2. inventory_value (ancien format)
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from raidstats.models import LossSource, ProfitResolution, ProfitSource, Raid

_Rule = Tuple[ProfitSource | LossSource, Callable[[Raid], Optional[float]]]


def _extract_minus_bring_in(raid: Raid) -> Optional[float]:
    if raid.extract_value is None or raid.bring_in_value is None:
        return None
    return raid.extract_value - raid.bring_in_value


def _extract_only(raid: Raid) -> Optional[float]:
    return raid.extract_value


def _bring_in(raid: Raid) -> Optional[float]:
    return raid.bring_in_value


def _legacy_inventory(raid: Raid) -> Optional[float]:
    return raid.inventory_value


PROFIT_RULES: Sequence[_Rule] = (
    (ProfitSource.EXTRACT_MINUS_BRING_IN, _extract_minus_bring_in),
    (ProfitSource.EXTRACT_ONLY, _extract_only),
    (ProfitSource.LEGACY_INVENTORY, _legacy_inventory),
)

LOSS_RULES: Sequence[_Rule] = (
    (LossSource.BRING_IN, _bring_in),
    (LossSource.LEGACY_INVENTORY, _legacy_inventory),
)


def _resolve(raid: Raid, rules: Sequence[_Rule]) -> Optional[ProfitResolution]:
    for source, rule in rules:
        value = rule(raid)
        if value is not None:
            return ProfitResolution(value=float(value), source=source)
    return None


def resolve_profit(raid: Raid) -> Optional[ProfitResolution]:
    """Résout le profit d'un raid réussi, avec la règle appliquée.

    Returns:
        ProfitResolution, ou None si le raid est raté ou sans valeur.
    """
    if not raid.successful:
        return None
    return _resolve(raid, PROFIT_RULES)


def resolve_loss(raid: Raid) -> Optional[ProfitResolution]:
    """Résout la perte d'un raid raté, avec la règle appliquée.

    Returns:
        ProfitResolution, ou None si le raid est réussi ou sans valeur.
    """
    if raid.successful:
        return None
    return _resolve(raid, LOSS_RULES)


def effective_profit(raid: Raid) -> Optional[float]:
    """Profit d'un raid réussi (None si non défini)."""
    resolved = resolve_profit(raid)
    return resolved.value if resolved is not None else None


def effective_loss(raid: Raid) -> Optional[float]:
    """Perte d'un raid raté (None si non définie)."""
    resolved = resolve_loss(raid)
    return resolved.value if resolved is not None else None
