"""
Reverse lookups from item id to the quests, workbench upgrades and project
phases that consume it.

Maps are display-only. They are rebuilt wholesale per locale so consumer
names follow the display language, and cached for the lifetime of the
process. Which items a quest needs never depends on the locale.
"""

from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

import catalog_service
from catalog_service import localized_text
from constants import FALLBACK_LOCALE, QUEST_OBJECTIVE_PATTERNS

RequirementMap = Dict[str, List[Dict[str, Any]]]


def build_item_name_index(items: List[Dict[str, Any]], locale: Optional[str] = None) -> Dict[str, str]:
    """Lowercased display name -> item id. The first item with a name wins."""
    index: Dict[str, str] = {}
    for item in items:
        name = localized_text(item.get("name"), locale).lower()
        if name and name not in index:
            index[name] = item["id"]
    return index


def parse_objective(text: str) -> Optional[Tuple[int, str]]:
    for pattern in QUEST_OBJECTIVE_PATTERNS:
        match = pattern.match(text)
        if match:
            return int(match.group(1)), match.group(2).strip()
    return None


def build_quest_requirements(
    quests: List[Dict[str, Any]],
    name_index: Dict[str, str],
    locale: Optional[str] = None,
) -> RequirementMap:
    quest_map: RequirementMap = {}
    for quest in quests:
        quest_name = localized_text(quest.get("name"), locale) or quest["id"]

        for req in quest.get("requiredItemIds") or []:
            quest_map.setdefault(req["itemId"], []).append(
                {"questName": quest_name, "quantity": req["quantity"]}
            )

        # Objective text can name items the explicit list leaves out. The phrase
        # patterns are English, so objectives are always read in English.
        for objective in quest.get("objectives") or []:
            parsed = parse_objective(localized_text(objective, FALLBACK_LOCALE))
            if parsed is None:
                continue
            quantity, item_name = parsed
            item_id = name_index.get(item_name.lower())
            if not item_id:
                continue
            existing = quest_map.get(item_id, [])
            if any(req["questName"] == quest_name for req in existing):
                continue
            quest_map.setdefault(item_id, []).append({"questName": quest_name, "quantity": quantity})
    return quest_map


def build_workbench_requirements(
    workbenches: List[Dict[str, Any]],
    locale: Optional[str] = None,
) -> RequirementMap:
    hideout_map: RequirementMap = {}
    for module in workbenches:
        module_name = localized_text(module.get("name"), locale) or module["id"]
        for level in module.get("levels") or []:
            for req in level.get("requirementItemIds") or []:
                hideout_map.setdefault(req["itemId"], []).append(
                    {"moduleName": module_name, "level": level["level"], "quantity": req["quantity"]}
                )
    return hideout_map


def build_project_requirements(
    projects: List[Dict[str, Any]],
    locale: Optional[str] = None,
) -> RequirementMap:
    project_map: RequirementMap = {}
    for project in projects:
        project_name = localized_text(project.get("name"), locale) or project["id"]
        for phase in project.get("phases") or []:
            for req in phase.get("requirementItemIds") or []:
                project_map.setdefault(req["itemId"], []).append(
                    {"projectName": project_name, "phase": phase["phase"], "quantity": req["quantity"]}
                )
    return project_map


def build_requirement_maps(
    items: List[Dict[str, Any]],
    quests: List[Dict[str, Any]],
    workbenches: List[Dict[str, Any]],
    projects: List[Dict[str, Any]],
    locale: Optional[str] = None,
) -> Dict[str, RequirementMap]:
    name_index = build_item_name_index(items, FALLBACK_LOCALE)
    return {
        "quests": build_quest_requirements(quests, name_index, locale),
        "upgrades": build_workbench_requirements(workbenches, locale),
        "projects": build_project_requirements(projects, locale),
    }


@lru_cache(maxsize=None)
def get_requirement_maps(locale: str) -> Dict[str, RequirementMap]:
    return build_requirement_maps(
        catalog_service.load_item_catalog(),
        catalog_service.load_quest_catalog(),
        catalog_service.load_workbench_catalog(),
        catalog_service.load_project_catalog(),
        locale,
    )
