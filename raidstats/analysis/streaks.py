"""Calcul des séries de victoires / défaites."""

from __future__ import annotations

from typing import Sequence

from raidstats.models import CurrentStreak, Raid, StreakData, StreakType


def chronological(raids: Sequence[Raid]) -> list[Raid]:
    """Retourne les raids du plus ancien au plus récent.

    L'entrée est supposée du plus récent au plus ancien : on l'inverse puis
    on trie (tri stable) par date de création, ce qui garde l'ordre inversé
    pour les raids de même date.
    """
    return sorted(reversed(list(raids)), key=lambda r: r.created_at.timestamp())


def compute_streaks(raids: Sequence[Raid]) -> StreakData:
    """Calcule la série en cours et les meilleures / pires séries.

    Parcours unique dans l'ordre chronologique : à chaque changement de
    résultat, la série qui se termine est comparée aux records. La série
    en cours est la dernière série ouverte (pas forcément la meilleure).

    Args:
        raids: Raids dans un ordre quelconque.

    Returns:
        StreakData ; current.type == "none" si aucun raid.
    """
    if not raids:
        return StreakData(current=CurrentStreak(type="none", count=0), best_win=0, worst_loss=0)

    best_win = 0
    worst_loss = 0
    run_type: StreakType = "none"
    run_length = 0

    def close_run() -> None:
        nonlocal best_win, worst_loss
        if run_type == "win":
            best_win = max(best_win, run_length)
        elif run_type == "loss":
            worst_loss = max(worst_loss, run_length)

    for raid in chronological(raids):
        outcome: StreakType = "win" if raid.successful else "loss"
        if outcome == run_type:
            run_length += 1
            continue
        close_run()
        run_type = outcome
        run_length = 1

    close_run()
    return StreakData(
        current=CurrentStreak(type=run_type, count=run_length),
        best_win=best_win,
        worst_loss=worst_loss,
    )
