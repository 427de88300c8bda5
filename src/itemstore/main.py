"""Minimal itemstore server."""

from __future__ import annotations

import uvicorn

from .api import create_app
from .config import get_settings
from .log import configure_logging, get_logger
from .manager import RecordStore

logger = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    store = RecordStore(in_memory=settings.in_memory, settings=settings)
    if store.error is not None:
        logger.warning("store_unavailable", error=str(store.error))

    app = create_app(store)
    try:
        uvicorn.run(app, host=settings.host, port=settings.port)
    finally:
        store.close()


if __name__ == "__main__":
    main()
