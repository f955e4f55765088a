import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from catalog_service import localized_text
from constants import (
    DEFAULT_SORT_COLUMN,
    DEFAULT_SORT_DIRECTION,
    MISSING_VALUE_LABEL,
    NO_DATA_LABEL,
    NUMERIC_SORT_COLUMNS,
    SORT_COLUMNS,
    unknown_label,
)
from requirements_service import RequirementMap


@dataclass(frozen=True)
class SortState:
    column: str = DEFAULT_SORT_COLUMN
    direction: str = DEFAULT_SORT_DIRECTION


def next_sort_state(state: SortState, column: str) -> SortState:
    """Header click: flip direction on the active column, else select ascending."""
    if state.column == column:
        return SortState(column, "desc" if state.direction == "asc" else "asc")
    return SortState(column, "asc")


def build_column_headers(state: SortState) -> List[Dict[str, Any]]:
    headers: List[Dict[str, Any]] = []
    for col in SORT_COLUMNS:
        nxt = next_sort_state(state, col["id"])
        headers.append(
            {
                "id": col["id"],
                "label": col["label"],
                "active": col["id"] == state.column,
                "direction": state.direction if col["id"] == state.column else None,
                "next": {"sort": nxt.column, "direction": nxt.direction},
            }
        )
    return headers


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

def filter_items(items: List[Dict[str, Any]], search: str, locale: Optional[str] = None) -> List[Dict[str, Any]]:
    term = (search or "").lower()
    return [item for item in items if term in localized_text(item.get("name"), locale).lower()]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def _as_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def sort_value(
    item: Dict[str, Any],
    column: str,
    maps: Dict[str, RequirementMap],
    locale: Optional[str] = None,
) -> Any:
    item_id = item["id"]
    if column == "name":
        return localized_text(item.get("name"), locale)
    if column == "type":
        return item.get("type") or ""
    if column == "rarity":
        return item.get("rarity") or ""
    if column == "value":
        return item.get("value") or 0
    if column == "recycleValue":
        return item.get("recycleValue") or 0
    if column == "salvageValue":
        return item.get("salvageValue") or 0
    if column == "recyclesTo":
        return len(item.get("recyclesInto") or {})
    if column == "recycledFrom":
        return len(item.get("recycledFrom") or {})
    if column == "salvagesTo":
        return len(item.get("salvagesInto") or {})
    if column == "salvagedFrom":
        return len(item.get("salvagedFrom") or {})
    if column == "droppedBy":
        return len(item.get("droppedBy") or [])
    if column in ("quests", "upgrades", "projects"):
        return len(maps.get(column, {}).get(item_id, []))
    return ""


def sort_items(
    items: List[Dict[str, Any]],
    state: SortState,
    maps: Dict[str, RequirementMap],
    locale: Optional[str] = None,
) -> List[Dict[str, Any]]:
    reverse = state.direction == "desc"
    if state.column in NUMERIC_SORT_COLUMNS:
        return sorted(items, key=lambda it: _as_int(sort_value(it, state.column, maps, locale)), reverse=reverse)

    def text_key(item: Dict[str, Any]):
        text = str(sort_value(item, state.column, maps, locale))
        return (text.casefold(), text)

    return sorted(items, key=text_key, reverse=reverse)


# ---------------------------------------------------------------------------
# Row building
# ---------------------------------------------------------------------------

def _component_rows(
    components: Dict[str, Any],
    lookup: Dict[str, Dict[str, Any]],
    locale: Optional[str],
) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for ref_id, qty in components.items():
        ref = lookup.get(ref_id)
        name = localized_text(ref.get("name"), locale) if ref else ""
        rows.append({"id": ref_id, "name": name or unknown_label(ref_id), "quantity": qty})
    return rows


def _lines_or_placeholder(lines: List[str]) -> List[str]:
    return lines or [NO_DATA_LABEL]


def _better_value(sell: Any, recycle: Any) -> str:
    sell_i, recycle_i = sell or 0, recycle or 0
    if sell_i > recycle_i:
        return "sell"
    if recycle_i > sell_i:
        return "recycle"
    return "equal"


def build_item_row(
    item: Dict[str, Any],
    lookup: Dict[str, Dict[str, Any]],
    maps: Dict[str, RequirementMap],
    locale: Optional[str] = None,
) -> Dict[str, Any]:
    item_id = item["id"]
    recycles_to = _component_rows(item.get("recyclesInto") or {}, lookup, locale)
    recycled_from = sorted(
        _component_rows(item.get("recycledFrom") or {}, lookup, locale),
        key=lambda r: r["name"].casefold(),
    )
    salvages_to = _component_rows(item.get("salvagesInto") or {}, lookup, locale)
    salvaged_from = sorted(
        _component_rows(item.get("salvagedFrom") or {}, lookup, locale),
        key=lambda r: r["name"].casefold(),
    )
    dropped_by = [
        {"id": bot["id"], "name": bot.get("name") or unknown_label(bot["id"]), "icon": bot.get("icon")}
        for bot in (item.get("droppedBy") or [])
    ]
    quests = maps.get("quests", {}).get(item_id, [])
    upgrades = maps.get("upgrades", {}).get(item_id, [])
    projects = maps.get("projects", {}).get(item_id, [])

    value = item.get("value")
    recycle_value = item.get("recycleValue") or 0
    rarity = item.get("rarity") or ""

    return {
        "id": item_id,
        "name": localized_text(item.get("name"), locale) or item_id,
        "type": item.get("type") or "",
        "rarity": rarity,
        "rarityClass": rarity.lower(),
        "value": value,
        "recycleValue": recycle_value,
        "salvageValue": item.get("salvageValue") or 0,
        "better": _better_value(value, recycle_value),
        "recyclesTo": recycles_to,
        "recycledFrom": recycled_from,
        "salvagesTo": salvages_to,
        "salvagedFrom": salvaged_from,
        "droppedBy": dropped_by,
        "quests": quests,
        "upgrades": upgrades,
        "projects": projects,
        "display": {
            "value": MISSING_VALUE_LABEL if value is None else str(value),
            "recyclesTo": _lines_or_placeholder([f"{r['name']} x{r['quantity']}" for r in recycles_to]),
            "recycledFrom": _lines_or_placeholder([f"{r['name']} x{r['quantity']}" for r in recycled_from]),
            "salvagesTo": _lines_or_placeholder([f"{r['name']} x{r['quantity']}" for r in salvages_to]),
            "salvagedFrom": _lines_or_placeholder([f"{r['name']} x{r['quantity']}" for r in salvaged_from]),
            "droppedBy": _lines_or_placeholder([b["name"] for b in dropped_by]),
            "quests": _lines_or_placeholder([f"{q['questName']} x{q['quantity']}" for q in quests]),
            "upgrades": _lines_or_placeholder(
                [f"{u['moduleName']} Lv.{u['level']} x{u['quantity']}" for u in upgrades]
            ),
            "projects": _lines_or_placeholder(
                [f"{p['projectName']} Ph.{p['phase']} x{p['quantity']}" for p in projects]
            ),
        },
    }


def browse_items(
    items: List[Dict[str, Any]],
    lookup: Dict[str, Dict[str, Any]],
    maps: Dict[str, RequirementMap],
    search: str = "",
    state: SortState = SortState(),
    locale: Optional[str] = None,
) -> List[Dict[str, Any]]:
    filtered = filter_items(items, search, locale)
    ordered = sort_items(filtered, state, maps, locale)
    return [build_item_row(item, lookup, maps, locale) for item in ordered]


# ---------------------------------------------------------------------------
# Search debounce
# ---------------------------------------------------------------------------

class SearchDebouncer:
    """Defer a search callback until input has been quiet for ``delay_s``.

    Every ``submit`` cancels the pending timer, so only the latest term fires.
    """

    def __init__(self, delay_s: float, callback: Callable[[str], None]):
        self.delay_s = delay_s
        self.callback = callback
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def submit(self, term: str) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay_s, self.callback, args=(term,))
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None and self._timer.is_alive()
