#!/usr/bin/env python3
"""Script de statistiques des raids.

Point d'entrée unique pour :
- Afficher le rapport de statistiques (texte ou JSON)
- Exporter / importer la base au format JSON
- Enregistrer un raid

Usage:
    python scripts/raid_stats.py --help
    python scripts/raid_stats.py report                      # Rapport complet
    python scripts/raid_stats.py report --query map          # Sections filtrées
    python scripts/raid_stats.py report --json               # Rapport JSON
    python scripts/raid_stats.py export raids.json
    python scripts/raid_stats.py import raids.json
    python scripts/raid_stats.py add --map Spaceport --win --bring-in 20000 --extract 65000
"""

from __future__ import annotations

import argparse
import json
import logging
import sqlite3
import sys
from pathlib import Path
from typing import Any

# Ajouter le répertoire parent au path pour les imports
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from raidstats.analysis.report import build_stats_report
from raidstats.analysis.search import STAT_SECTIONS
from raidstats.config import MAPS, get_conditions_for_map, get_default_db_path
from raidstats.db.store import RaidStore
from raidstats.formatting import format_duration, format_percent, format_signed_value
from raidstats.models import RaidInput

# Configuration du logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

SECTION_TITLES = {s.id: s.title for s in STAT_SECTIONS}


# =============================================================================
# Affichage texte
# =============================================================================


def _print_groups(title: str, groups: list[dict[str, Any]]) -> None:
    if not groups:
        return
    print(f"  {title}")
    for g in groups:
        print(
            f"    {g['label']:<24} {g['successful']:>4}/{g['total']:<4} "
            f"{format_percent(g['success_rate']):>7}  avg {format_signed_value(g['avg_loot'])}"
        )


def print_report(report: dict[str, dict[str, Any]]) -> None:
    """Affiche le rapport sous forme de texte."""
    for section_id, values in report.items():
        print(f"== {SECTION_TITLES[section_id]} ==")
        if section_id == "overview":
            s = values["summary"]
            st = values["streaks"]
            print(
                f"  Raids: {s['total']} | Extractions: {s['successful']} | Morts: {s['failed']} | "
                f"Réussite: {format_percent(s['success_rate'])} | Kills: {s['total_kills']}"
            )
            print(
                f"  Série en cours: {st['current']['count']} ({st['current']['type']}) | "
                f"Meilleure: {st['best_win']} | Pire: {st['worst_loss']}"
            )
        elif section_id == "time":
            t = values["trend"]
            print(
                f"  Tendance: {t['trend']} (10 derniers {format_percent(t['recent'])}, "
                f"global {format_percent(t['overall'])})"
            )
            _print_groups("Jour", values["by_day_of_week"])
            _print_groups("Heure", values["by_time_of_day"])
        elif section_id == "squad":
            _print_groups("Escouade", values["by_squad_size"])
            _print_groups("Coéquipiers", values["by_teammate"])
            _print_groups("Duos", values["combos"])
        elif section_id == "duration":
            _print_groups("Durée", values["by_duration"])
            avg = values["avg_by_outcome"]
            print(
                f"  Durée moyenne: extraction {format_duration(round(avg['win'], 1))} | "
                f"mort {format_duration(round(avg['loss'], 1))}"
            )
        elif section_id == "loot":
            print(
                f"  Profit total: {format_signed_value(values['total_loot'])} | "
                f"Pertes: {format_signed_value(-values['total_loss'])} | "
                f"Profit/min: {values['loot_per_minute']:.0f}"
            )
            for label, b in values["by_map"].items():
                print(f"    {label:<24} x{b['count']:<4} avg {format_signed_value(b['avg_loot'])}")
        else:
            for key, groups in values.items():
                _print_groups(key, groups)
        print()


# =============================================================================
# Commandes
# =============================================================================


def cmd_report(store: RaidStore, args: argparse.Namespace) -> int:
    raids = store.get_raids()
    report = build_stats_report(raids, query=args.query or "", tz_name=args.timezone)
    if not report:
        logger.warning(f"Aucune section ne correspond à '{args.query}'")
        return 0
    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        print_report(report)
    return 0


def cmd_export(store: RaidStore, args: argparse.Namespace) -> int:
    data = store.export_data()
    Path(args.path).write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"{len(data['raids'])} raids exportés vers {args.path}")
    return 0


def cmd_import(store: RaidStore, args: argparse.Namespace) -> int:
    payload = json.loads(Path(args.path).read_text(encoding="utf-8"))
    store.import_data(payload)
    return 0


def cmd_add(store: RaidStore, args: argparse.Namespace) -> int:
    if args.condition and args.condition not in get_conditions_for_map(args.map):
        raise ValueError(f"Condition '{args.condition}' indisponible sur {args.map}")
    raid = store.save_raid(
        RaidInput(
            successful=args.win,
            map=args.map,
            map_condition=args.condition,
            teammates=tuple(args.teammate or ()),
            bring_in_value=args.bring_in,
            extract_value=args.extract if args.win else None,
            raid_duration_mins=args.duration,
            raid_start_mins=args.start,
            squad_kills=args.kills,
        )
    )
    logger.info(f"Raid enregistré: {raid.id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Statistiques de raids")
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="Chemin vers la base SQLite (défaut: RAIDSTATS_DB ou raids.db)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Mode verbeux",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Affiche le rapport de statistiques")
    report.add_argument("--query", type=str, default="", help="Filtre les sections")
    report.add_argument("--json", action="store_true", help="Sortie JSON")
    report.add_argument("--timezone", type=str, default=None, help="Fuseau (ex: Europe/Paris)")
    report.set_defaults(func=cmd_report)

    export = sub.add_parser("export", help="Exporte la base au format JSON")
    export.add_argument("path", type=str)
    export.set_defaults(func=cmd_export)

    imp = sub.add_parser("import", help="Remplace la base par un export JSON")
    imp.add_argument("path", type=str)
    imp.set_defaults(func=cmd_import)

    add = sub.add_parser("add", help="Enregistre un raid")
    add.add_argument("--map", type=str, required=True, choices=MAPS)
    outcome = add.add_mutually_exclusive_group(required=True)
    outcome.add_argument("--win", action="store_true", help="Extraction réussie")
    outcome.add_argument("--loss", action="store_true", help="Mort en raid")
    add.add_argument("--condition", type=str, default=None)
    add.add_argument("--teammate", action="append", help="Coéquipier (répétable)")
    add.add_argument("--bring-in", type=float, default=None)
    add.add_argument("--extract", type=float, default=None)
    add.add_argument("--duration", type=float, default=None, help="Durée (minutes)")
    add.add_argument("--start", type=float, default=None, help="Compte à rebours à l'entrée")
    add.add_argument("--kills", type=int, default=None)
    add.set_defaults(func=cmd_add)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    db_path = args.db or get_default_db_path()
    logger.debug(f"Base de données: {db_path}")

    try:
        store = RaidStore(db_path)
        return args.func(store, args)
    except (ValueError, OSError, sqlite3.Error) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
