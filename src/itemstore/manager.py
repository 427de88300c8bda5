"""
RecordStore – owns one item container and the published projection of it.

* Every mutation is followed by a full reload of ``items`` (newest first).
* Failures never raise; they are recorded into ``error`` and stay there
  until a newer failure replaces them or ``clear_error()`` is called.
* All public operations run under one re-entrant lock (single writer).
"""

from __future__ import annotations

import datetime as dt
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

from .bootstrap import open_container
from .config import Settings
from .core.record import Item, now_utc
from .core.state import StorePhase, StoreState
from .errors import ItemStoreError, NilContextError
from .events import EventRegistry, OnDecorator
from .log import get_logger
from .persistence.store import ItemRepository
from .serial import serialized

logger = get_logger(__name__)

Opener = Callable[..., ItemRepository]


class RecordStore:
    """Create, list and delete timestamped Items in one container."""

    def __init__(
        self,
        in_memory: bool = False,
        *,
        settings: Optional[Settings] = None,
        opener: Opener = open_container,
        clock: Callable[[], dt.datetime] = now_utc,
    ):
        self.state = StoreState()
        self.events = EventRegistry()
        self.on = OnDecorator(self.events)
        self.repository: Optional[ItemRepository] = None
        self._clock = clock
        self._lock = threading.RLock()

        try:
            repository = opener(in_memory=in_memory, settings=settings)
        except ItemStoreError as exc:
            self.state.phase = StorePhase.FAILED
            self._record_error("open", exc)
            return

        self.repository = repository
        self.repository.autosave_enabled = True
        self.state.phase = StorePhase.READY
        self._list()

    # ---- published state ------------------------------------------------
    @property
    def items(self) -> List[Item]:
        return self.state.items

    @property
    def error(self) -> Optional[BaseException]:
        return self.state.error

    @property
    def phase(self) -> StorePhase:
        return self.state.phase

    def snapshot(self) -> Dict[str, Any]:
        return self.state.snapshot()

    def subscribe(self, event_type: str, handler: Callable) -> Callable[[], None]:
        """Register ``handler`` for ``event_type``; returns an unsubscribe callable."""
        return self.events.register(event_type, handler)

    # ---- operations -----------------------------------------------------
    @serialized
    def list_records(self) -> None:
        """Reload ``items`` from the container."""
        self._list()

    @serialized
    def create_record(self) -> Optional[Item]:
        """Insert a new Item stamped with the current time, save and reload."""
        if self.repository is None:
            self._record_error("create", NilContextError())
            return None

        item = Item(timestamp=self._clock())
        try:
            self.repository.insert(item)
        except ItemStoreError as exc:
            self._record_error("create", exc)
            return None
        logger.info("item_created", item_id=str(item.id), timestamp=item.timestamp.isoformat())
        self.events.emit("create", self, item)
        self._save()
        self._list()
        return item

    @serialized
    def delete_records(self, offsets: Iterable[int]) -> None:
        """
        Delete the Items at ``offsets`` (positions in the current ``items``),
        save and reload. An out-of-range offset raises IndexError before
        anything is deleted.
        """
        if self.repository is None:
            self._record_error("delete", NilContextError())
            return

        current = self.state.items
        positions = sorted(set(offsets))
        for index in positions:
            if not 0 <= index < len(current):
                raise IndexError(
                    f"offset {index} out of range for {len(current)} items"
                )

        doomed = [current[index] for index in positions]
        try:
            for item in doomed:
                self.repository.delete(item.id)
        except ItemStoreError as exc:
            self._record_error("delete", exc)
        else:
            logger.info("items_deleted", count=len(doomed))
            self.events.emit("delete", self, doomed)
        self._save()
        self._list()

    @serialized
    def clear_error(self) -> None:
        self.state.error = None

    @serialized
    def close(self) -> None:
        """Release the container; later operations report NilContextError."""
        if self.repository is not None:
            self.repository.close()
            self.repository = None
            self.state.phase = StorePhase.CLOSED

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ---- internals ------------------------------------------------------
    def _list(self) -> None:
        if self.repository is None:
            self._record_error("list", NilContextError())
            return
        try:
            items = self.repository.fetch_sorted()
        except ItemStoreError as exc:
            self._record_error("list", exc)
            return
        self.state.items = items
        logger.debug("items_listed", count=len(items))
        self.events.emit("change", self)

    def _save(self) -> None:
        if self.repository is None:
            self._record_error("save", NilContextError())
            return
        try:
            self.repository.save()
        except ItemStoreError as exc:
            self._record_error("save", exc)

    def _record_error(self, operation: str, exc: ItemStoreError) -> None:
        logger.error("store_operation_failed", operation=operation, error=str(exc))
        self.state.error = exc
        self.events.emit("error", self, exc)
