"""Index de recherche des sections de statistiques."""

from typing import List, Tuple

from raidstats.models import SearchableSection

STAT_SECTIONS: Tuple[SearchableSection, ...] = (
    SearchableSection(
        "overview",
        "Overview",
        ("overview", "total", "success", "rate", "wins", "deaths", "streak"),
    ),
    SearchableSection(
        "time",
        "Time Patterns",
        (
            "time", "day", "week", "monday", "tuesday", "wednesday", "thursday",
            "friday", "saturday", "sunday", "morning", "afternoon", "evening",
            "night", "trend", "performance",
        ),
    ),
    SearchableSection(
        "squad",
        "Squad Analysis",
        ("squad", "team", "teammate", "friend", "solo", "duo", "trio", "combo", "partner", "group"),
    ),
    SearchableSection(
        "map",
        "Map Statistics",
        ("map", "dam", "buried", "spaceport", "stella", "blue gate", "location"),
    ),
    SearchableSection(
        "condition",
        "Conditions",
        (
            "condition", "weather", "cold snap", "night raid", "storm",
            "electromagnetic", "hidden bunker", "locked gate", "normal",
        ),
    ),
    SearchableSection(
        "spawn",
        "Spawn Time",
        ("spawn", "start", "early", "late", "join", "timer"),
    ),
    SearchableSection(
        "duration",
        "Raid Duration",
        ("duration", "time", "quick", "long", "minutes", "length"),
    ),
    SearchableSection(
        "loot",
        "Profit Analysis",
        ("loot", "value", "money", "profit", "loss", "efficiency", "credits", "bring in", "extract"),
    ),
)

SECTION_IDS: Tuple[str, ...] = tuple(s.id for s in STAT_SECTIONS)


def section_matches(section: SearchableSection, query: str) -> bool:
    q = query.lower()
    return q in section.title.lower() or any(q in kw for kw in section.keywords)


def search_sections(query: str) -> List[str]:
    """Retourne les ids des sections correspondant à la recherche.

    Requête vide (ou blanche) -> toutes les sections. Sinon, une section est
    retenue si son titre contient la requête (sans tenir compte de la casse)
    ou si l'un de ses mots-clés la contient. L'ordre du catalogue est conservé.
    """
    if not (query or "").strip():
        return list(SECTION_IDS)
    return [s.id for s in STAT_SECTIONS if section_matches(s, query)]
