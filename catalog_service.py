import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from constants import FALLBACK_LOCALE
from settings import (
    BOTS_FILE,
    DATA_DIR,
    DEFAULT_LOCALE,
    ITEMS_FILE,
    PROJECTS_FILE,
    QUESTS_FILE,
    WORKBENCHES_FILE,
)

Number = Union[int, float]


class CatalogError(ValueError):
    pass


# ---------------------------------------------------------------------------
# JSON file helpers
# ---------------------------------------------------------------------------

def read_json_array(path: Path) -> List[Any]:
    if not path.exists():
        raise CatalogError(f"Catalog not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise CatalogError(f"Top-level JSON in {path} must be an array")
    return payload


def load_json_list(path: Path) -> List[Dict[str, Any]]:
    records: List[Dict[str, Any]] = []
    for index, entry in enumerate(read_json_array(path)):
        if not isinstance(entry, dict):
            logging.warning("Skipping entry %d in %s: expected an object, got %s", index, path, type(entry).__name__)
            continue
        records.append(entry)
    return records


def write_json_list(path: Path, records: List[Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")


def _load_optional_list(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        logging.warning("Catalog %s is missing, treating it as empty", path)
        return []
    return load_json_list(path)


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def localized_text(value: Any, locale: Optional[str] = None) -> str:
    """Resolve a plain or locale-keyed display string.

    Locale-keyed values fall back to English, then to the first non-empty
    translation. Anything else resolves to an empty string.
    """
    if isinstance(value, str):
        return value
    if not isinstance(value, dict):
        return ""
    for key in (locale or DEFAULT_LOCALE, FALLBACK_LOCALE):
        text = value.get(key)
        if isinstance(text, str) and text:
            return text
    for text in value.values():
        if isinstance(text, str) and text:
            return text
    return ""


def as_quantity(value: Any) -> Number:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    try:
        parsed = float(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return int(parsed) if parsed.is_integer() else parsed


def _optional_number(value: Any) -> Optional[Number]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            float(value.strip())
        except ValueError:
            return None
        return as_quantity(value)
    return None


def _component_map(value: Any) -> Optional[Dict[str, Number]]:
    if not isinstance(value, dict):
        return None
    return {str(k): as_quantity(v) for k, v in value.items() if str(k).strip()}


def _normalize_requirements(raw: Any) -> List[Dict[str, Any]]:
    requirements: List[Dict[str, Any]] = []
    for req in (raw or []):
        if not isinstance(req, dict):
            continue
        item_id = str(req.get("itemId") or req.get("item_id") or "").strip()
        if not item_id:
            continue
        requirements.append({"itemId": item_id, "quantity": as_quantity(req.get("quantity"))})
    return requirements


# ---------------------------------------------------------------------------
# Catalog normalizers
# ---------------------------------------------------------------------------

def _normalize_item(entry: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    item_id = str(entry.get("id") or "").strip()
    if not item_id:
        return None
    dropped_by = [
        {
            "id": str(bot.get("id") or ""),
            "name": str(bot.get("name") or bot.get("id") or ""),
            "icon": bot.get("icon"),
        }
        for bot in (entry.get("droppedBy") or [])
        if isinstance(bot, dict)
    ]
    return {
        "id": item_id,
        "name": entry.get("name") if isinstance(entry.get("name"), (str, dict)) else item_id,
        "type": str(entry.get("type") or entry.get("item_type") or ""),
        "rarity": str(entry.get("rarity") or ""),
        "value": _optional_number(entry.get("value")),
        "recyclesInto": _component_map(entry.get("recyclesInto")),
        "salvagesInto": _component_map(entry.get("salvagesInto")),
        "recycleValue": as_quantity(entry.get("recycleValue") or 0),
        "salvageValue": as_quantity(entry.get("salvageValue") or 0),
        "recycledFrom": _component_map(entry.get("recycledFrom")) or {},
        "salvagedFrom": _component_map(entry.get("salvagedFrom")) or {},
        "droppedBy": dropped_by,
    }


def _normalize_bot(entry: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    bot_id = str(entry.get("id") or "").strip()
    if not bot_id:
        return None
    return {
        "id": bot_id,
        "name": str(entry.get("name") or bot_id),
        "drops": [str(d) for d in (entry.get("drops") or []) if str(d).strip()],
    }


def _normalize_quest(entry: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    quest_id = str(entry.get("id") or "").strip()
    if not quest_id:
        return None
    raw_required = entry.get("requiredItemIds")
    if raw_required is None:
        raw_required = entry.get("required_items")
    return {
        "id": quest_id,
        "name": entry.get("name") if isinstance(entry.get("name"), (str, dict)) else quest_id,
        "requiredItemIds": _normalize_requirements(raw_required),
        "objectives": [o for o in (entry.get("objectives") or []) if isinstance(o, (str, dict))],
    }


def _normalize_stages(entry: Dict[str, Any], stages_key: str, number_key: str) -> Optional[Dict[str, Any]]:
    entry_id = str(entry.get("id") or "").strip()
    if not entry_id:
        return None
    stages: List[Dict[str, Any]] = []
    for stage in (entry.get(stages_key) or []):
        if not isinstance(stage, dict):
            continue
        stages.append(
            {
                number_key: int(as_quantity(stage.get(number_key))),
                "requirementItemIds": _normalize_requirements(stage.get("requirementItemIds")),
            }
        )
    return {
        "id": entry_id,
        "name": entry.get("name") if isinstance(entry.get("name"), (str, dict)) and entry.get("name") else None,
        stages_key: stages,
    }


def _normalize_all(entries: List[Dict[str, Any]], normalizer) -> List[Dict[str, Any]]:
    catalog: List[Dict[str, Any]] = []
    for entry in entries:
        normalized = normalizer(entry)
        if normalized is not None:
            catalog.append(normalized)
    return catalog


# ---------------------------------------------------------------------------
# Cached loaders
# ---------------------------------------------------------------------------

@lru_cache(maxsize=1)
def load_item_catalog() -> List[Dict[str, Any]]:
    return _normalize_all(load_json_list(DATA_DIR / ITEMS_FILE), _normalize_item)


@lru_cache(maxsize=1)
def load_item_lookup() -> Dict[str, Dict[str, Any]]:
    return {item["id"]: item for item in load_item_catalog()}


@lru_cache(maxsize=1)
def load_bot_catalog() -> List[Dict[str, Any]]:
    return _normalize_all(_load_optional_list(DATA_DIR / BOTS_FILE), _normalize_bot)


@lru_cache(maxsize=1)
def load_quest_catalog() -> List[Dict[str, Any]]:
    return _normalize_all(_load_optional_list(DATA_DIR / QUESTS_FILE), _normalize_quest)


@lru_cache(maxsize=1)
def load_workbench_catalog() -> List[Dict[str, Any]]:
    return _normalize_all(
        _load_optional_list(DATA_DIR / WORKBENCHES_FILE),
        lambda entry: _normalize_stages(entry, "levels", "level"),
    )


@lru_cache(maxsize=1)
def load_project_catalog() -> List[Dict[str, Any]]:
    return _normalize_all(
        _load_optional_list(DATA_DIR / PROJECTS_FILE),
        lambda entry: _normalize_stages(entry, "phases", "phase"),
    )


def clear_catalog_caches() -> None:
    for loader in (
        load_item_catalog,
        load_item_lookup,
        load_bot_catalog,
        load_quest_catalog,
        load_workbench_catalog,
        load_project_catalog,
    ):
        loader.cache_clear()
