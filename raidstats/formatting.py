# -*- coding: utf-8 -*-
"""Fonctions de formatage.

Ce module centralise les utilitaires de formatage :
- Valeurs d'inventaire (crédits)
- Durées
- Dates / heures
- Pourcentages
"""
from __future__ import annotations

import math
from datetime import datetime
from zoneinfo import ZoneInfo

__all__ = [
    "to_local_naive",
    "format_inventory_value",
    "format_duration",
    "format_time",
    "format_date",
    "format_percent",
    "format_signed_value",
]


def to_local_naive(dt_value: datetime, tz_name: str | None = None) -> datetime:
    """Convertit une date en datetime naïf (sans tzinfo) dans le fuseau voulu.

    - tz-aware -> convertit vers tz_name (ou l'heure locale du système) puis enlève tzinfo
    - naïf -> supposé déjà en heure locale
    """
    if dt_value.tzinfo is None:
        return dt_value
    if tz_name:
        return dt_value.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)
    return dt_value.astimezone().replace(tzinfo=None)


def format_inventory_value(value: float | None) -> str:
    """Formate une valeur en crédits, ex: 75000 -> '75k'.

    Args:
        value: Valeur en crédits.

    Returns:
        Valeur abrégée, ou "-" si absente.
    """
    if value is None:
        return "-"
    if value >= 1000:
        # arrondi au plus proche, demi vers le haut (2500 -> 3k)
        return f"{math.floor(value / 1000 + 0.5)}k"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_duration(minutes: float) -> str:
    if float(minutes).is_integer():
        minutes = int(minutes)
    return f"{minutes} min"


def format_time(dt_value: datetime, tz_name: str | None = None) -> str:
    """Heure au format HH:MM."""
    return to_local_naive(dt_value, tz_name).strftime("%H:%M")


def format_date(dt_value: datetime, tz_name: str | None = None) -> str:
    """Date courte, ex: 'Jan 5, 14:03'."""
    d = to_local_naive(dt_value, tz_name)
    return f"{d.strftime('%b')} {d.day}, {d.strftime('%H:%M')}"


def format_percent(rate: float | None, digits: int = 1) -> str:
    """Formate un taux déjà exprimé en pourcentage (0-100)."""
    if rate is None:
        return "-"
    return f"{rate:.{digits}f}%"


def format_signed_value(value: float | None) -> str:
    """Profit signé, ex: '+12k' / '-5k'."""
    if value is None:
        return "-"
    if value < 0:
        return "-" + format_inventory_value(-value)
    return "+" + format_inventory_value(value)
