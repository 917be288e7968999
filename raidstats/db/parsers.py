"""Fonctions de parsing et de conversion pour le stockage.

Conversions entre les raids (dataclasses) et :
- les lignes SQLite de la table Raids
- le format JSON d'export (clés camelCase, champ historique `inventoryValue` inclus)

Les valeurs numériques mal formées sont traitées comme absentes (None).
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

from raidstats.models import Raid, Teammate

# Champ dataclass -> clé JSON
PAYLOAD_KEYS: Dict[str, str] = {
    "id": "id",
    "created_at": "createdAt",
    "successful": "successful",
    "map": "map",
    "map_condition": "mapCondition",
    "teammates": "teammates",
    "bring_in_value": "bringInValue",
    "extract_value": "extractValue",
    "inventory_value": "inventoryValue",
    "raid_duration_mins": "raidDurationMins",
    "raid_start_mins": "raidStartMins",
    "squad_kills": "squadKills",
}


def parse_iso_utc(s: str) -> datetime:
    """Parse une date ISO 8601 en datetime UTC.

    Gère le suffixe "Z" (ex: 2026-01-02T20:18:01.293Z). Une date sans
    fuseau est supposée en UTC.

    Args:
        s: Chaîne de date au format ISO 8601.

    Returns:
        datetime en timezone UTC.

    Raises:
        ValueError: si la chaîne n'est pas une date ISO 8601.
    """
    s = str(s).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_iso_utc(dt: datetime) -> str:
    """Formate une date en ISO 8601 UTC avec suffixe "Z" (millisecondes)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    d = dt.astimezone(timezone.utc)
    return d.strftime("%Y-%m-%dT%H:%M:%S.") + f"{d.microsecond // 1000:03d}Z"


def coerce_number(v: Any) -> Optional[float]:
    """Convertit une valeur en float de manière robuste.

    Args:
        v: Valeur à convertir (nombre, chaîne numérique...).

    Returns:
        La valeur en float, ou None si la conversion échoue.
    """
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        f = float(v)
        return f if f == f else None
    if isinstance(v, str):
        s = v.strip()
        if not s:
            return None
        try:
            f = float(s)
        except ValueError:
            return None
        return f if f == f else None
    return None


def coerce_int(v: Any) -> Optional[int]:
    f = coerce_number(v)
    if f is None or f in (float("inf"), float("-inf")):
        return None
    return int(f)


def coerce_bool(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(v)


def coerce_teammates(v: Any) -> Tuple[str, ...]:
    """Liste de coéquipiers depuis une liste ou une chaîne JSON."""
    if v is None:
        return ()
    if isinstance(v, str):
        try:
            v = json.loads(v)
        except ValueError:
            return ()
    if not isinstance(v, (list, tuple)):
        return ()
    return tuple(str(x) for x in v if x is not None)


def coerce_condition(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v)
    return s if s.strip() else None


# =============================================================================
# SQLite
# =============================================================================


def raid_from_row(row: Mapping[str, Any]) -> Raid:
    """Construit un Raid depuis une ligne de la table Raids."""
    return Raid(
        id=str(row["id"]),
        created_at=parse_iso_utc(row["created_at"]),
        successful=coerce_bool(row["successful"]),
        map=str(row["map"]),
        map_condition=coerce_condition(row["map_condition"]),
        teammates=coerce_teammates(row["teammates"]),
        bring_in_value=coerce_number(row["bring_in_value"]),
        extract_value=coerce_number(row["extract_value"]),
        inventory_value=coerce_number(row["inventory_value"]),
        raid_duration_mins=coerce_number(row["raid_duration_mins"]),
        raid_start_mins=coerce_number(row["raid_start_mins"]),
        squad_kills=coerce_int(row["squad_kills"]),
    )


def raid_to_row(raid: Raid) -> Tuple[Any, ...]:
    """Valeurs d'insertion, dans l'ordre de schema.RAID_COLUMNS."""
    return (
        raid.id,
        format_iso_utc(raid.created_at),
        1 if raid.successful else 0,
        raid.map,
        raid.map_condition,
        json.dumps(list(raid.teammates), ensure_ascii=False),
        raid.bring_in_value,
        raid.extract_value,
        raid.inventory_value,
        raid.raid_duration_mins,
        raid.raid_start_mins,
        raid.squad_kills,
    )


# =============================================================================
# JSON (export / import)
# =============================================================================


def raid_from_payload(payload: Mapping[str, Any]) -> Raid:
    """Construit un Raid depuis un objet JSON exporté.

    Raises:
        ValueError: si `id`, `createdAt` ou `map` manque, ou si la date est invalide.
    """
    if not isinstance(payload, Mapping):
        raise ValueError(f"Raid invalide: objet attendu, reçu {type(payload).__name__}")
    for key in ("id", "createdAt", "map"):
        if not payload.get(key):
            raise ValueError(f"Raid invalide: champ '{key}' manquant")

    return Raid(
        id=str(payload["id"]),
        created_at=parse_iso_utc(payload["createdAt"]),
        successful=coerce_bool(payload.get("successful")),
        map=str(payload["map"]),
        map_condition=coerce_condition(payload.get("mapCondition")),
        teammates=coerce_teammates(payload.get("teammates")),
        bring_in_value=coerce_number(payload.get("bringInValue")),
        extract_value=coerce_number(payload.get("extractValue")),
        inventory_value=coerce_number(payload.get("inventoryValue")),
        raid_duration_mins=coerce_number(payload.get("raidDurationMins")),
        raid_start_mins=coerce_number(payload.get("raidStartMins")),
        squad_kills=coerce_int(payload.get("squadKills")),
    )


def raid_to_payload(raid: Raid) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for attr, key in PAYLOAD_KEYS.items():
        value = getattr(raid, attr)
        if attr == "created_at":
            value = format_iso_utc(value)
        elif attr == "teammates":
            value = list(value)
        out[key] = value
    return out


def teammate_from_payload(payload: Mapping[str, Any]) -> Teammate:
    if not isinstance(payload, Mapping):
        raise ValueError(f"Coéquipier invalide: objet attendu, reçu {type(payload).__name__}")
    username = str(payload.get("username") or "").strip()
    if not username:
        raise ValueError("Coéquipier invalide: 'username' manquant")
    return Teammate(username=username, last_played=parse_iso_utc(payload.get("lastPlayed") or ""))


def teammate_to_payload(teammate: Teammate) -> Dict[str, Any]:
    return {"username": teammate.username, "lastPlayed": format_iso_utc(teammate.last_played)}
