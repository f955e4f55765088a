"""
Shared pytest fixtures for the item database tests.

Provides:
  - A fixture data directory (written to a temp dir, enriched, and selected
    through DATA_DIR before any app module is imported)
  - Raw catalog copies for pure unit tests
  - Cached catalog accessors
  - FastAPI TestClient
"""

import copy
import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List

import pytest

# ---------------------------------------------------------------------------
# Ensure the project root is on sys.path so we can import app modules
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# ---------------------------------------------------------------------------
# Fixture catalogs
# ---------------------------------------------------------------------------

FIXTURE_ITEMS: List[Dict[str, Any]] = [
    {"id": "scrap_metal", "name": "Scrap Metal", "type": "Basic Material", "rarity": "Common", "value": 10},
    {"id": "fabric", "name": "Fabric", "type": "Basic Material", "rarity": "Common", "value": 5},
    {
        "id": "advanced_part",
        "name": "Advanced Part",
        "type": "Refined Material",
        "rarity": "Rare",
        "value": 100,
        "recyclesInto": {"scrap_metal": 2, "fabric": 1},
    },
    {
        "id": "rusted_gear",
        "name": "Rusted Gear",
        "type": "Recyclable",
        "rarity": "Uncommon",
        "value": 40,
        "recyclesInto": {"scrap_metal": 3, "ghost_item": 2},
        "salvagesInto": {"scrap_metal": 1},
    },
    {
        "id": "battery",
        "name": {"en": "Battery", "de": "Batterie"},
        "type": "Refined Material",
        "rarity": "Uncommon",
        "value": 30,
    },
    {"id": "dog_collar", "name": "Dog Collar", "type": "Trinket", "rarity": "Common"},
    {
        "id": "empty_crate",
        "name": "Empty Crate",
        "type": "Trinket",
        "rarity": "Common",
        "value": 0,
        "salvagesInto": {},
    },
]

FIXTURE_BOTS: List[Dict[str, Any]] = [
    {"id": "wasp", "name": "WASP", "drops": ["scrap_metal", "battery"]},
    {"id": "leaper", "name": "LEAPER", "drops": ["rusted_gear"]},
    {"id": "mystery", "name": "big  MYSTERY bot", "drops": ["scrap_metal"]},
    {"id": "tick", "name": "TICK"},
]

FIXTURE_QUESTS: List[Dict[str, Any]] = [
    {
        "id": "q1",
        "name": "Picking Up The Pieces",
        "requiredItemIds": [{"itemId": "fabric", "quantity": 3}],
        "objectives": ["Obtain 5 Scrap Metal", "Collect 2 Fabric", "Talk to Shani"],
    },
    {
        "id": "q2",
        "name": {"en": "Power Play", "de": "Machtspiel"},
        "objectives": [
            {"en": "Get 2 Battery for the generator", "de": "Besorge 2 Batterie für den Generator"},
            "Find 1 Unobtainium",
        ],
    },
    {
        "id": "q3",
        "name": "Old Habits",
        "required_items": [{"item_id": "rusted_gear", "quantity": 1}],
        "objectives": ["Obtain 1 Rusted Gear", "Gather 4 scrap metal", "Obtain 2 Scrap Metal"],
    },
]

FIXTURE_WORKBENCHES: List[Dict[str, Any]] = [
    {
        "id": "scrappy",
        "name": "Scrappy",
        "levels": [
            {"level": 2, "requirementItemIds": [{"itemId": "fabric", "quantity": 10}]},
            {
                "level": 3,
                "requirementItemIds": [
                    {"itemId": "battery", "quantity": 2},
                    {"itemId": "fabric", "quantity": 5},
                ],
            },
        ],
    },
    {
        "id": "gunsmith",
        "levels": [{"level": 1, "requirementItemIds": [{"itemId": "rusted_gear", "quantity": 3}]}],
    },
]

FIXTURE_PROJECTS: List[Dict[str, Any]] = [
    {
        "id": "expedition",
        "name": "Expedition",
        "phases": [
            {"phase": 1, "requirementItemIds": [{"itemId": "scrap_metal", "quantity": 150}]},
            {
                "phase": 2,
                "requirementItemIds": [
                    {"itemId": "scrap_metal", "quantity": 50},
                    {"itemId": "advanced_part", "quantity": 1},
                ],
            },
        ],
    },
]


def write_fixture_data(data_dir: Path) -> None:
    data_dir.mkdir(parents=True, exist_ok=True)
    for name, payload in (
        ("items.json", FIXTURE_ITEMS),
        ("bots.json", FIXTURE_BOTS),
        ("quests.json", FIXTURE_QUESTS),
        ("workbenches.json", FIXTURE_WORKBENCHES),
        ("projects.json", FIXTURE_PROJECTS),
    ):
        (data_dir / name).write_text(json.dumps(payload, indent=2), encoding="utf-8")


# Write and enrich the fixture data before the app reads DATA_DIR.
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="itemdb_test_"))
write_fixture_data(_TEST_DATA_DIR)
os.environ["DATA_DIR"] = str(_TEST_DATA_DIR)
os.environ.setdefault("DEFAULT_LOCALE", "en")

from enrichment_service import run_prebuild  # noqa: E402

run_prebuild(_TEST_DATA_DIR)


# ---------------------------------------------------------------------------
# Raw data (fresh copies, safe to mutate)
# ---------------------------------------------------------------------------

@pytest.fixture()
def raw_items() -> List[Dict[str, Any]]:
    return copy.deepcopy(FIXTURE_ITEMS)


@pytest.fixture()
def raw_bots() -> List[Dict[str, Any]]:
    return copy.deepcopy(FIXTURE_BOTS)


@pytest.fixture()
def fixture_data_dir(tmp_path: Path) -> Path:
    """A private copy of the raw fixture data in tmp_path."""
    write_fixture_data(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Catalog helpers
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def item_catalog() -> List[Dict[str, Any]]:
    import catalog_service
    return catalog_service.load_item_catalog()


@pytest.fixture(scope="session")
def item_lookup() -> Dict[str, Dict[str, Any]]:
    import catalog_service
    return catalog_service.load_item_lookup()


@pytest.fixture(scope="session")
def quest_catalog() -> List[Dict[str, Any]]:
    import catalog_service
    return catalog_service.load_quest_catalog()


@pytest.fixture(scope="session")
def workbench_catalog() -> List[Dict[str, Any]]:
    import catalog_service
    return catalog_service.load_workbench_catalog()


@pytest.fixture(scope="session")
def project_catalog() -> List[Dict[str, Any]]:
    import catalog_service
    return catalog_service.load_project_catalog()


@pytest.fixture(scope="session")
def requirement_maps(item_catalog, quest_catalog, workbench_catalog, project_catalog):
    """Requirement maps for the default (English) locale."""
    from requirements_service import build_requirement_maps
    return build_requirement_maps(item_catalog, quest_catalog, workbench_catalog, project_catalog, "en")


# ---------------------------------------------------------------------------
# FastAPI TestClient
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    """Return a Starlette TestClient wired to the FastAPI app."""
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app) as c:
        yield c
