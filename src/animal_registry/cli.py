"""
Command-line entrypoint for the Animal Registry API.

- Parses CLI args / env config
- Opens the SQLite store (and seeds it when --seed-file is given)
- Serves the FastAPI app with uvicorn
"""
from __future__ import annotations
import logging, sys
from typing import List, Optional

import uvicorn

from .app import create_app
from .config import Settings, parse_args
from .store import AnimalStore

logger = logging.getLogger(__name__)

def main(argv: Optional[List[str]] = None) -> None:
    settings = Settings.from_args(parse_args(argv))
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(
        "Animal Registry: db=%s prefix=%s cors=%s listen=%s:%d",
        settings.db_path, settings.prefix, ",".join(settings.cors_origins), settings.host, settings.port,
    )
    store = AnimalStore.open(settings.db_path)
    try:
        app = create_app(settings, store=store)
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)
    finally:
        store.close()
