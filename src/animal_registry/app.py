"""
Application factory: wires store -> handler -> routes and mounts them under the
versioned prefix.
"""
from __future__ import annotations
import json, logging
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import router as animals_router
from .config import Settings
from .handler import AnimalsHandler, IndexPicker
from .models import Animal
from .store import AnimalStore

logger = logging.getLogger(__name__)


def load_seed_file(path: str | Path) -> List[Animal]:
    """Read a JSON list of animals (camelCase or snake_case keys)."""
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"seed file {path} must contain a JSON list")
    return [Animal.model_validate(item) for item in raw]


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[AnimalStore] = None,
    pick_index: Optional[IndexPicker] = None,
) -> FastAPI:
    settings = settings or Settings()
    if store is None:
        store = AnimalStore.open(settings.db_path)

    if settings.seed_file:
        inserted = store.seed(load_seed_file(settings.seed_file))
        logger.info("Seeded %d animal(s) from %s", inserted, settings.seed_file)

    app = FastAPI(title="Animal Registry", version=__version__)
    app.state.settings = settings
    app.state.handler = AnimalsHandler(store, pick_index=pick_index)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(animals_router, prefix=settings.prefix, tags=["animals"])

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "animal-registry"}

    return app
