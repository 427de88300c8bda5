"""
Single entry-point that opens an item container with SQLAlchemy.
Ephemeral containers get a private in-memory SQLite database each.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from .config import Settings, get_settings
from .errors import BackendError
from .log import get_logger
from .persistence.models import Base
from .persistence.store import SqlItemRepository

logger = get_logger(__name__)


def _create_engine(in_memory: bool, database_url: str) -> Engine:
    if in_memory:
        # one connection shared by the pool ➜ the database lives as long as the engine
        return create_engine(
            "sqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            future=True,
        )
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            url, connect_args={"check_same_thread": False}, future=True
        )
    return create_engine(url, pool_pre_ping=True, future=True)


def open_container(
    *, in_memory: bool = False, settings: Optional[Settings] = None
) -> SqlItemRepository:
    """
    Open (or create) the container and return a repository bound to it.
    Raises BackendError when the database cannot be reached or prepared.
    """
    settings = settings or get_settings()
    target = "memory" if in_memory else settings.database_url.split("@")[-1]
    try:
        engine = _create_engine(in_memory, settings.database_url)
        Base.metadata.create_all(engine)  # ← this line creates table
    except (SQLAlchemyError, OSError, ImportError) as exc:
        logger.debug("container_open_failed", target=target, error=str(exc))
        raise BackendError("open", exc) from exc
    logger.info("container_opened", target=target)
    return SqlItemRepository(engine)
