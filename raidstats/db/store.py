"""Stockage SQLite des raids et des coéquipiers.

Les raids sont toujours relus du plus récent au plus ancien. Les lectures
en erreur sont journalisées et renvoient une liste vide ; les écritures
propagent sqlite3.Error.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from raidstats.config import get_default_db_path
from raidstats.db.connection import get_connection
from raidstats.db.parsers import (
    coerce_teammates,
    format_iso_utc,
    parse_iso_utc,
    raid_from_payload,
    raid_from_row,
    raid_to_payload,
    raid_to_row,
    teammate_from_payload,
    teammate_to_payload,
)
from raidstats.db.schema import RAID_COLUMNS, SCHEMA_VERSION, get_all_table_ddl
from raidstats.models import Raid, RaidInput, Teammate

logger = logging.getLogger(__name__)

_INSERT_RAID = (
    f"INSERT INTO Raids ({', '.join(RAID_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in RAID_COLUMNS)})"
)
_UPDATE_RAID = (
    f"UPDATE Raids SET {', '.join(f'{c} = ?' for c in RAID_COLUMNS[1:])} WHERE id = ?"
)
_UPSERT_TEAMMATE = """
INSERT INTO Teammates (username_key, username, last_played) VALUES (?, ?, ?)
ON CONFLICT(username_key) DO UPDATE SET last_played = excluded.last_played
"""

UPDATABLE_FIELDS = frozenset(f.name for f in fields(RaidInput))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _teammate_key(username: str) -> str:
    return username.strip().lower()


def _payload_list(payload: Mapping[str, Any], key: str) -> List[Any]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Export invalide: '{key}' doit être une liste")
    return value


class RaidStore:
    """Accès aux raids et coéquipiers d'une base SQLite.

    Exemple d'utilisation:
        store = RaidStore("raids.db")
        store.save_raid(RaidInput(successful=True, map="Spaceport"))
        raids = store.get_raids()
    """

    def __init__(self, db_path: str | None = None):
        """Initialise le stockage et crée les tables si besoin.

        Args:
            db_path: Chemin vers le fichier SQLite (défaut: config.get_default_db_path()).
        """
        self.db_path = db_path or get_default_db_path()
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        with get_connection(self.db_path) as con:
            for ddl in get_all_table_ddl():
                con.execute(ddl)
            con.execute(
                "INSERT OR REPLACE INTO StoreMeta (key, value) VALUES ('schema_version', ?)",
                (SCHEMA_VERSION,),
            )
            con.commit()

    # =========================================================================
    # Raids
    # =========================================================================

    def get_raids(self) -> List[Raid]:
        """Retourne tous les raids, du plus récent au plus ancien."""
        try:
            with get_connection(self.db_path) as con:
                rows = con.execute(
                    "SELECT * FROM Raids ORDER BY created_at DESC, rowid DESC"
                ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Erreur de lecture des raids: {e}")
            return []

        raids: List[Raid] = []
        for row in rows:
            try:
                raids.append(raid_from_row(row))
            except ValueError as e:
                logger.warning(f"Raid ignoré ({row['id']}): {e}")
        return raids

    def get_raid(self, raid_id: str) -> Optional[Raid]:
        with get_connection(self.db_path) as con:
            row = con.execute("SELECT * FROM Raids WHERE id = ?", (raid_id,)).fetchone()
        return raid_from_row(row) if row is not None else None

    def get_last_raid(self) -> Optional[Raid]:
        raids = self.get_raids()
        return raids[0] if raids else None

    def save_raid(self, data: RaidInput, now: datetime | None = None) -> Raid:
        """Enregistre un nouveau raid (id et date attribués ici).

        Les coéquipiers du raid sont ajoutés / rafraîchis dans Teammates.

        Args:
            data: Données saisies.
            now: Date de création (défaut: maintenant, UTC).

        Returns:
            Le Raid enregistré.
        """
        # Date ramenée à la précision stockée (ms, UTC)
        created_at = parse_iso_utc(format_iso_utc(now or _utc_now()))
        raid = Raid.from_input(
            replace(data, teammates=tuple(data.teammates)),
            raid_id=str(uuid.uuid4()),
            created_at=created_at,
        )
        with get_connection(self.db_path) as con:
            con.execute(_INSERT_RAID, raid_to_row(raid))
            con.commit()
        logger.debug(f"Raid {raid.id} enregistré ({raid.map})")

        if raid.teammates:
            self.add_teammates(raid.teammates, now=created_at)
        return raid

    def update_raid(self, raid_id: str, **updates: Any) -> Optional[Raid]:
        """Remplace un raid par sa version modifiée.

        Args:
            raid_id: Identifiant du raid.
            **updates: Champs de RaidInput à modifier.

        Returns:
            Le raid modifié, ou None si l'id est inconnu.

        Raises:
            ValueError: si un champ n'est pas modifiable (id, created_at, inconnu).
        """
        unknown = set(updates) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Champs non modifiables: {', '.join(sorted(unknown))}")

        current = self.get_raid(raid_id)
        if current is None:
            return None

        if "teammates" in updates:
            updates["teammates"] = coerce_teammates(list(updates["teammates"] or ()))
        updated = replace(current, **updates)
        row = raid_to_row(updated)
        with get_connection(self.db_path) as con:
            con.execute(_UPDATE_RAID, (*row[1:], raid_id))
            con.commit()
        return updated

    def delete_raid(self, raid_id: str) -> bool:
        with get_connection(self.db_path) as con:
            cur = con.execute("DELETE FROM Raids WHERE id = ?", (raid_id,))
            con.commit()
            return cur.rowcount > 0

    # =========================================================================
    # Coéquipiers
    # =========================================================================

    def get_teammates(self) -> List[Teammate]:
        """Retourne les coéquipiers, joués le plus récemment en premier."""
        try:
            with get_connection(self.db_path) as con:
                rows = con.execute(
                    "SELECT username, last_played FROM Teammates ORDER BY last_played DESC, rowid ASC"
                ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Erreur de lecture des coéquipiers: {e}")
            return []
        return [
            Teammate(username=row["username"], last_played=parse_iso_utc(row["last_played"]))
            for row in rows
        ]

    def add_teammates(self, usernames: Iterable[str], now: datetime | None = None) -> None:
        """Ajoute des coéquipiers ou rafraîchit leur date de dernière partie.

        Les pseudos sont nettoyés (espaces), les vides ignorés ; un pseudo
        déjà connu (sans tenir compte de la casse) garde son écriture d'origine.
        """
        stamp = format_iso_utc(now or _utc_now())
        params: List[Tuple[str, str, str]] = []
        for username in usernames:
            normalized = (username or "").strip()
            if not normalized:
                continue
            params.append((_teammate_key(normalized), normalized, stamp))
        if not params:
            return
        with get_connection(self.db_path) as con:
            con.executemany(_UPSERT_TEAMMATE, params)
            con.commit()

    def add_teammate(self, username: str) -> Teammate:
        """Ajoute un coéquipier et le retourne.

        Raises:
            ValueError: si le pseudo est vide.
        """
        if not (username or "").strip():
            raise ValueError("Pseudo de coéquipier vide")
        self.add_teammates([username])
        with get_connection(self.db_path) as con:
            row = con.execute(
                "SELECT username, last_played FROM Teammates WHERE username_key = ?",
                (_teammate_key(username),),
            ).fetchone()
        return Teammate(username=row["username"], last_played=parse_iso_utc(row["last_played"]))

    def delete_teammate(self, username: str) -> bool:
        with get_connection(self.db_path) as con:
            cur = con.execute(
                "DELETE FROM Teammates WHERE username_key = ?", (_teammate_key(username),)
            )
            con.commit()
            return cur.rowcount > 0

    # =========================================================================
    # Export / import
    # =========================================================================

    def export_data(self) -> Dict[str, List[Dict[str, Any]]]:
        """Exporte raids et coéquipiers au format JSON (clés camelCase)."""
        return {
            "raids": [raid_to_payload(r) for r in self.get_raids()],
            "teammates": [teammate_to_payload(t) for t in self.get_teammates()],
        }

    def import_data(self, payload: Mapping[str, Any]) -> Tuple[int, int]:
        """Remplace le contenu de la base par un export.

        Tout est validé avant d'écrire : un export invalide ne modifie rien.

        Returns:
            (nombre de raids, nombre de coéquipiers) importés.

        Raises:
            ValueError: si l'export n'a pas la bonne forme, ou si un raid
                ou un coéquipier est invalide.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Export invalide: objet JSON attendu")
        raids = [raid_from_payload(p) for p in _payload_list(payload, "raids")]
        teammates = [teammate_from_payload(p) for p in _payload_list(payload, "teammates")]

        with get_connection(self.db_path) as con:
            con.execute("DELETE FROM Raids")
            con.execute("DELETE FROM Teammates")
            # Export du plus récent au plus ancien : insertion chronologique
            con.executemany(_INSERT_RAID, [raid_to_row(r) for r in reversed(raids)])
            con.executemany(
                _UPSERT_TEAMMATE,
                [
                    (_teammate_key(t.username), t.username, format_iso_utc(t.last_played))
                    for t in teammates
                ],
            )
            con.commit()

        logger.info(f"Import: {len(raids)} raids, {len(teammates)} coéquipiers")
        return len(raids), len(teammates)

    def clear_all_data(self) -> None:
        with get_connection(self.db_path) as con:
            con.execute("DELETE FROM Raids")
            con.execute("DELETE FROM Teammates")
            con.commit()
        logger.info("Base vidée (raids et coéquipiers)")
