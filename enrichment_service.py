"""
Build-time enrichment of the item catalog.

Adds derived economic and relational fields to every item record:
  recycleValue   sum of (target value x qty) over recyclesInto
  salvageValue   same over salvagesInto, else recycleValue
  recycledFrom   source item id -> qty for items that recycle into this one
  salvagedFrom   source item id -> qty for items that salvage into this one
  droppedBy      bots that list this item in their drops

Unresolved references contribute nothing; they are never an error.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from catalog_service import as_quantity, load_json_list, read_json_array, write_json_list
from constants import BOT_ICONS
from settings import BOTS_FILE, DATA_DIR, ITEMS_FILE


def _records(items: List[Any]) -> List[Dict[str, Any]]:
    return [item for item in items if isinstance(item, dict)]


def title_case_name(name: str) -> str:
    words = str(name or "").lower().split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words).strip()


def build_dropped_by_map(
    bots: List[Dict[str, Any]],
    icons: Optional[Dict[str, str]] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    icons = BOT_ICONS if icons is None else icons
    dropped_by: Dict[str, List[Dict[str, Any]]] = {}
    for bot in bots:
        drops = bot.get("drops")
        if not drops:
            continue
        bot_id = bot.get("id")
        for item_id in drops:
            entry: Dict[str, Any] = {"id": bot_id, "name": title_case_name(bot.get("name") or "")}
            icon = icons.get(bot_id)
            if icon:
                entry["icon"] = icon
            dropped_by.setdefault(item_id, []).append(entry)
    return dropped_by


def build_reverse_index(items: List[Any], field: str) -> Dict[str, Dict[str, Any]]:
    """Invert ``field`` (recyclesInto / salvagesInto) into target -> {source: qty}."""
    reverse: Dict[str, Dict[str, Any]] = {}
    for item in _records(items):
        components = item.get(field)
        if not isinstance(components, dict):
            continue
        for target_id, qty in components.items():
            reverse.setdefault(target_id, {})[item.get("id")] = qty
    return reverse


def sum_component_value(components: Dict[str, Any], lookup: Dict[str, Dict[str, Any]]) -> Any:
    total: Any = 0
    for target_id, qty in components.items():
        target = lookup.get(target_id)
        if not target:
            continue
        value = as_quantity(target.get("value"))
        if value:
            total += value * as_quantity(qty)
    return total


def enrich_items(items: List[Any], bots: List[Dict[str, Any]]) -> List[Any]:
    """Attach derived fields to every item record in place and return the list.

    Entries that are not objects are left untouched.
    """
    dropped_by = build_dropped_by_map(bots)
    lookup = {item.get("id"): item for item in _records(items)}
    recycled_from = build_reverse_index(items, "recyclesInto")
    salvaged_from = build_reverse_index(items, "salvagesInto")

    for item in _records(items):
        recycles = item.get("recyclesInto")
        if isinstance(recycles, dict):
            item["recycleValue"] = sum_component_value(recycles, lookup)
        else:
            item["recycleValue"] = 0

        salvages = item.get("salvagesInto")
        if isinstance(salvages, dict):
            item["salvageValue"] = sum_component_value(salvages, lookup)
        else:
            item["salvageValue"] = item["recycleValue"] or 0

        item["recycledFrom"] = recycled_from.get(item.get("id"), {})
        item["salvagedFrom"] = salvaged_from.get(item.get("id"), {})
        item["droppedBy"] = dropped_by.get(item.get("id"), [])

    return items


def run_prebuild(data_dir: Path = DATA_DIR) -> List[Any]:
    items_path = data_dir / ITEMS_FILE
    items = read_json_array(items_path)
    bots = load_json_list(data_dir / BOTS_FILE)
    enrich_items(items, bots)
    write_json_list(items_path, items)
    logging.info("Enriched %d items from %d bots into %s", len(items), len(bots), items_path)
    return items
