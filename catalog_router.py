"""
Item database API routes.

Handles:
  /api/health
  /api/locales
  /api/items
  /api/items/query
  /api/items/{item_id}
  /api/quests
  /api/workbenches
  /api/projects
  /api/bots
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

import browse_service
import catalog_service
import requirements_service
from browse_service import SortState
from constants import SORT_COLUMN_IDS, SORT_DIRECTIONS, SUPPORTED_LOCALE_IDS, SUPPORTED_LOCALES
from settings import DEFAULT_LOCALE, SEARCH_DEBOUNCE_MS

router = APIRouter(tags=["catalog"])


class ItemQueryReq(BaseModel):
    search: str = ""
    sort: str = "name"
    direction: str = "asc"
    locale: Optional[str] = None


def _resolve_locale(locale: Optional[str]) -> str:
    locale = (locale or DEFAULT_LOCALE).strip()
    if locale not in SUPPORTED_LOCALE_IDS:
        raise HTTPException(status_code=400, detail=f"Unsupported locale: {locale}")
    return locale


def _resolve_sort(sort: str, direction: str) -> SortState:
    sort = (sort or "").strip()
    direction = (direction or "").strip().lower()
    if sort not in SORT_COLUMN_IDS:
        raise HTTPException(status_code=400, detail=f"Unknown sort column: {sort}")
    if direction not in SORT_DIRECTIONS:
        raise HTTPException(status_code=400, detail="direction must be 'asc' or 'desc'")
    return SortState(sort, direction)


def _items_payload(search: str, sort: str, direction: str, locale: Optional[str]) -> Dict[str, Any]:
    loc = _resolve_locale(locale)
    state = _resolve_sort(sort, direction)
    items = catalog_service.load_item_catalog()
    rows = browse_service.browse_items(
        items,
        catalog_service.load_item_lookup(),
        requirements_service.get_requirement_maps(loc),
        search=search or "",
        state=state,
        locale=loc,
    )
    return {
        "locale": loc,
        "search": search or "",
        "sort": {"column": state.column, "direction": state.direction},
        "columns": browse_service.build_column_headers(state),
        "total": len(items),
        "count": len(rows),
        "items": rows,
    }


@router.get("/api/health")
def api_health() -> Dict[str, Any]:
    return {
        "ok": True,
        "service": "raider-item-db",
        "items": len(catalog_service.load_item_catalog()),
    }


@router.get("/api/locales")
def api_locales() -> Dict[str, Any]:
    return {
        "locales": SUPPORTED_LOCALES,
        "default": DEFAULT_LOCALE,
        "search_debounce_ms": SEARCH_DEBOUNCE_MS,
    }


@router.get("/api/items")
def api_items(
    search: str = "",
    sort: str = "name",
    direction: str = "asc",
    locale: Optional[str] = Query(default=None),
) -> Dict[str, Any]:
    return _items_payload(search, sort, direction, locale)


@router.post("/api/items/query")
def api_items_query(req: ItemQueryReq) -> Dict[str, Any]:
    return _items_payload(req.search, req.sort, req.direction, req.locale)


@router.get("/api/items/{item_id}")
def api_item_detail(item_id: str, locale: Optional[str] = Query(default=None)) -> Dict[str, Any]:
    loc = _resolve_locale(locale)
    lookup = catalog_service.load_item_lookup()
    item = lookup.get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return browse_service.build_item_row(item, lookup, requirements_service.get_requirement_maps(loc), loc)


@router.get("/api/quests")
def api_quests() -> Dict[str, Any]:
    return {"quests": catalog_service.load_quest_catalog()}


@router.get("/api/workbenches")
def api_workbenches() -> Dict[str, Any]:
    return {"workbenches": catalog_service.load_workbench_catalog()}


@router.get("/api/projects")
def api_projects() -> Dict[str, Any]:
    return {"projects": catalog_service.load_project_catalog()}


@router.get("/api/bots")
def api_bots() -> Dict[str, Any]:
    return {"bots": catalog_service.load_bot_catalog()}
