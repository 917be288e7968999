"""Gestion des connexions SQLite."""

import os
import sqlite3
from contextlib import contextmanager
from typing import Generator


def _connect_sqlite(db_path: str) -> sqlite3.Connection:
    """Ouvre une connexion SQLite (crée le dossier parent si besoin)."""
    parent = os.path.dirname(os.path.abspath(db_path))
    if parent and not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)
    con = sqlite3.connect(db_path)
    con.row_factory = sqlite3.Row
    return con


@contextmanager
def get_connection(db_path: str) -> Generator[sqlite3.Connection, None, None]:
    """Context manager pour obtenir une connexion SQLite.

    Args:
        db_path: Chemin vers le fichier SQLite.

    Yields:
        La connexion SQLite ouverte (lignes en sqlite3.Row).

    Exemple:
        with get_connection("raids.db") as con:
            con.execute("SELECT * FROM Raids")
    """
    con = _connect_sqlite(db_path)
    try:
        yield con
    finally:
        con.close()
