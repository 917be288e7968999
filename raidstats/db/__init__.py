"""Module de gestion de la base de données."""

from raidstats.db.connection import get_connection
from raidstats.db.parsers import (
    parse_iso_utc,
    format_iso_utc,
    coerce_number,
    coerce_int,
    raid_from_payload,
    raid_to_payload,
)
from raidstats.db.store import RaidStore

__all__ = [
    # connection
    "get_connection",
    # parsers
    "parse_iso_utc",
    "format_iso_utc",
    "coerce_number",
    "coerce_int",
    "raid_from_payload",
    "raid_to_payload",
    # store
    "RaidStore",
]
