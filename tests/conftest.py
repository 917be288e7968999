"""Fixtures partagées des tests."""

from __future__ import annotations

from datetime import datetime, timedelta
from itertools import count

import pytest

from raidstats.models import Raid

BASE_TIME = datetime(2026, 3, 2, 14, 0)  # lundi, 14h (naïf = heure locale)


@pytest.fixture
def make_raid():
    """Fabrique de raids : chaque appel crée un raid une heure avant le précédent.

    Les raids créés successivement sont donc déjà du plus récent au plus ancien.
    """
    seq = count()

    def _make(successful: bool = True, **kwargs) -> Raid:
        n = next(seq)
        values = {
            "id": f"raid-{n}",
            "created_at": BASE_TIME - timedelta(hours=n),
            "successful": successful,
            "map": "Spaceport",
        }
        if "teammates" in kwargs:
            kwargs["teammates"] = tuple(kwargs["teammates"])
        values.update(kwargs)
        return Raid(**values)

    return _make


@pytest.fixture
def chronological_raids(make_raid):
    """Construit des raids depuis une liste de résultats dans l'ordre chronologique.

    Retourne la liste du plus récent au plus ancien (ordre standard).
    """

    def _build(outcomes: list[bool]) -> list[Raid]:
        newest_first = [make_raid(successful=o) for o in reversed(outcomes)]
        return newest_first

    return _build
