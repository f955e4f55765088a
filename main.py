import os

from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

import catalog_service
from catalog_router import router as catalog_router
from settings import DATA_DIR, STATIC_DIR

app = FastAPI(title="Raider Item Database")
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(catalog_router)


@app.on_event("startup")
def _startup():
    items = catalog_service.load_item_catalog()
    print(
        f"[catalog] Loaded {len(items)} items, "
        f"{len(catalog_service.load_quest_catalog())} quests, "
        f"{len(catalog_service.load_workbench_catalog())} workbenches, "
        f"{len(catalog_service.load_project_catalog())} projects from {DATA_DIR}"
    )


@app.get("/")
def root():
    return FileResponse(str(STATIC_DIR / "index.html"))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=os.environ.get("HOST", "127.0.0.1"), port=int(os.environ.get("PORT", "8000")))
