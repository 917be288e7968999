"""Schéma des tables de stockage.

- Raids : un raid par ligne, coéquipiers en tableau JSON
- Teammates : coéquipiers connus, uniques sans tenir compte de la casse
"""

from __future__ import annotations

SCHEMA_VERSION = "1"

CREATE_RAIDS = """
CREATE TABLE IF NOT EXISTS Raids (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    successful INTEGER NOT NULL,
    map TEXT NOT NULL,
    map_condition TEXT,
    teammates TEXT NOT NULL DEFAULT '[]',
    bring_in_value REAL,
    extract_value REAL,
    -- Ancien champ unique (avant bring_in / extract)
    inventory_value REAL,
    raid_duration_mins REAL,
    raid_start_mins REAL,
    squad_kills INTEGER
)
"""

CREATE_RAIDS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_Raids_created_at ON Raids(created_at)",
]

CREATE_TEAMMATES = """
CREATE TABLE IF NOT EXISTS Teammates (
    username_key TEXT PRIMARY KEY,
    username TEXT NOT NULL,
    last_played TEXT NOT NULL
)
"""

CREATE_META = """
CREATE TABLE IF NOT EXISTS StoreMeta (
    key TEXT PRIMARY KEY,
    value TEXT
)
"""

RAID_COLUMNS = (
    "id",
    "created_at",
    "successful",
    "map",
    "map_condition",
    "teammates",
    "bring_in_value",
    "extract_value",
    "inventory_value",
    "raid_duration_mins",
    "raid_start_mins",
    "squad_kills",
)


def get_all_table_ddl() -> list[str]:
    """Retourne toutes les instructions DDL, dans l'ordre d'exécution."""
    return [CREATE_RAIDS, *CREATE_RAIDS_INDEXES, CREATE_TEAMMATES, CREATE_META]
