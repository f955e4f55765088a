"""
Canonical shared constants for the item database.

The enrichment script, the join layer and the API all read from here.
"""

import re
from typing import Dict, List, Pattern

# ---------------------------------------------------------------------------
# Bot icons
# ---------------------------------------------------------------------------

BOT_ICON_CDN = "https://cdn.metaforge.app/arc-raiders/icons/"

BOT_ICONS: Dict[str, str] = {
    "the_queen": BOT_ICON_CDN + "queen.webp",
    "fireball": BOT_ICON_CDN + "fireball.webp",
    "hornet": BOT_ICON_CDN + "hornet.webp",
    "wasp": BOT_ICON_CDN + "wasp.webp",
    "tick": BOT_ICON_CDN + "tick.webp",
    "leaper": BOT_ICON_CDN + "bison.webp",
    "pop": BOT_ICON_CDN + "pop.webp",
    "rocketeer": BOT_ICON_CDN + "rocketeer.webp",
    "bastion": BOT_ICON_CDN + "bastion.webp",
    "bombardier": BOT_ICON_CDN + "bombardier.webp",
    "sentinel": BOT_ICON_CDN + "sentinel.webp",
    "snitch": BOT_ICON_CDN + "snitch.webp",
    "arc_surveyor": BOT_ICON_CDN + "rollbot.webp",
    "shredder": BOT_ICON_CDN + "shredder.webp",
    "matriarch": BOT_ICON_CDN + "matriarch.webp",
    "turret": BOT_ICON_CDN + "turret.webp",
    "spotter": BOT_ICON_CDN + "snitch.webp",
}

# ---------------------------------------------------------------------------
# Locales
# ---------------------------------------------------------------------------

SUPPORTED_LOCALES: List[Dict[str, str]] = [
    {"id": "en", "label": "English"},
    {"id": "de", "label": "Deutsch"},
    {"id": "fr", "label": "Français"},
    {"id": "es", "label": "Español"},
    {"id": "pt", "label": "Português"},
    {"id": "pl", "label": "Polski"},
    {"id": "no", "label": "Norsk"},
    {"id": "da", "label": "Dansk"},
    {"id": "it", "label": "Italiano"},
    {"id": "ru", "label": "Русский"},
    {"id": "ja", "label": "日本語"},
    {"id": "zh-TW", "label": "繁體中文"},
    {"id": "uk", "label": "Українська"},
    {"id": "zh-CN", "label": "简体中文"},
    {"id": "kr", "label": "한국어"},
    {"id": "tr", "label": "Türkçe"},
    {"id": "hr", "label": "Hrvatski"},
    {"id": "sr", "label": "Srpski"},
]

SUPPORTED_LOCALE_IDS = frozenset(loc["id"] for loc in SUPPORTED_LOCALES)

FALLBACK_LOCALE = "en"

# ---------------------------------------------------------------------------
# Quest objective parsing
# ---------------------------------------------------------------------------

# Order matters: the first pattern that matches an objective wins.
QUEST_OBJECTIVE_PATTERNS: List[Pattern[str]] = [
    re.compile(r"^Obtain (\d+) (.+)$", re.IGNORECASE),
    re.compile(r"^Get (\d+) (.+) for", re.IGNORECASE),
    re.compile(r"^Collect (\d+) (.+)$", re.IGNORECASE),
    re.compile(r"^Gather (\d+) (.+)$", re.IGNORECASE),
    re.compile(r"^Find (\d+) (.+)$", re.IGNORECASE),
]

# ---------------------------------------------------------------------------
# Table columns
# ---------------------------------------------------------------------------

SORT_COLUMNS: List[Dict[str, str]] = [
    {"id": "name", "label": "Item"},
    {"id": "value", "label": "Value: Sell/Recycle"},
    {"id": "type", "label": "Type"},
    {"id": "rarity", "label": "Rarity"},
    {"id": "recyclesTo", "label": "Recycles To"},
    {"id": "recycledFrom", "label": "Recycled From"},
    {"id": "recycleValue", "label": "Recycle Value"},
    {"id": "salvagesTo", "label": "Salvages To"},
    {"id": "salvagedFrom", "label": "Salvaged From"},
    {"id": "salvageValue", "label": "Salvage Value"},
    {"id": "droppedBy", "label": "Dropped By"},
    {"id": "quests", "label": "Quests"},
    {"id": "upgrades", "label": "Upgrades"},
    {"id": "projects", "label": "Projects"},
]

SORT_COLUMN_IDS = frozenset(col["id"] for col in SORT_COLUMNS)

NUMERIC_SORT_COLUMNS = frozenset(
    {
        "value",
        "recyclesTo",
        "recycledFrom",
        "recycleValue",
        "salvagesTo",
        "salvagedFrom",
        "salvageValue",
        "droppedBy",
        "quests",
        "upgrades",
        "projects",
    }
)

SORT_DIRECTIONS = ("asc", "desc")

DEFAULT_SORT_COLUMN = "name"
DEFAULT_SORT_DIRECTION = "asc"

# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------

NO_DATA_LABEL = "No Data"
MISSING_VALUE_LABEL = "-"


def unknown_label(ref_id: str) -> str:
    return f"Unknown ({ref_id})"
