"""
Thin data-access layer around the `items` table.

``ItemRepository`` is the contract RecordStore talks to; ``SqlItemRepository``
is the SQLAlchemy implementation. Every backend failure leaves here as a
:class:`BackendError`.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import List

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.record import Item
from ..errors import BackendError
from ..log import get_logger
from .models import ItemRow

logger = get_logger(__name__)


class ItemRepository(ABC):
    """Insert, delete, commit and fetch Items in one container."""

    autosave_enabled: bool = False

    @abstractmethod
    def insert(self, item: Item) -> None: ...

    @abstractmethod
    def delete(self, item_id: uuid.UUID) -> None: ...

    @abstractmethod
    def save(self) -> None: ...

    @abstractmethod
    def fetch_sorted(self) -> List[Item]:
        """Return every Item, newest timestamp first."""

    def close(self) -> None:
        pass


class SqlItemRepository(ItemRepository):
    """One long-lived Session per container, like a UI model context."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session = self._new_session()

    def _new_session(self) -> Session:  # separate to keep pylint happy
        return Session(bind=self.engine, future=True, autoflush=False)

    # autosave ➜ pending writes are flushed before every query
    @property
    def autosave_enabled(self) -> bool:  # type: ignore[override]
        return bool(self.session.autoflush)

    @autosave_enabled.setter
    def autosave_enabled(self, value: bool) -> None:
        self.session.autoflush = value

    # ---- writes ---------------------------------------------------------
    def insert(self, item: Item) -> None:
        self.session.add(ItemRow(id=item.id, timestamp=item.timestamp))

    def delete(self, item_id: uuid.UUID) -> None:
        try:
            row = self.session.execute(
                select(ItemRow).where(ItemRow.id == item_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise BackendError("delete", exc) from exc
        if row is None:
            logger.debug("item_already_gone", item_id=str(item_id))
            return
        self.session.delete(row)

    def save(self) -> None:
        """Commit pending changes; a failed commit is rolled back so the
        session stays usable."""
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise BackendError("save", exc) from exc

    # ---- reads ----------------------------------------------------------
    def fetch_sorted(self) -> List[Item]:
        q = select(ItemRow).order_by(ItemRow.timestamp.desc(), ItemRow.seq.desc())
        try:
            rows = self.session.execute(q).scalars().all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise BackendError("fetch", exc) from exc
        return [Item.model_validate(row) for row in rows]

    def close(self) -> None:
        self.session.close()
        self.engine.dispose()
