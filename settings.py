import os
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.environ.get("DATA_DIR", str(APP_DIR / "data")))
STATIC_DIR = Path(os.environ.get("STATIC_DIR", str(APP_DIR / "static")))
DEFAULT_LOCALE = os.environ.get("DEFAULT_LOCALE", "en").strip() or "en"
SEARCH_DEBOUNCE_MS = int(os.environ.get("SEARCH_DEBOUNCE_MS", "300"))

ITEMS_FILE = "items.json"
BOTS_FILE = "bots.json"
QUESTS_FILE = "quests.json"
WORKBENCHES_FILE = "workbenches.json"
PROJECTS_FILE = "projects.json"
