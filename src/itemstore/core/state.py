"""
Published state of a RecordStore.

* ``items`` is the projection of the backend, newest first.
* ``error`` is the last recorded failure and stays until overwritten or
  explicitly cleared.
* ``snapshot`` renders the bag for observers.
"""

from __future__ import annotations

import enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .record import Item


class StorePhase(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"  # terminal for the instance
    CLOSED = "closed"


class StoreState(BaseModel):
    phase: StorePhase = StorePhase.UNINITIALIZED
    items: List[Item] = Field(default_factory=list)
    error: Optional[BaseException] = None
    model_config = {"frozen": False, "arbitrary_types_allowed": True}

    # ------------------------------------------------------------------ #
    # convenience helpers
    # ------------------------------------------------------------------ #
    def snapshot(self) -> Dict[str, Any]:
        """Return a JSON-ready view of phase, items and error."""
        return {
            "phase": self.phase.value,
            "items": [
                {**item.model_dump(mode="json"), "label": item.label()}
                for item in self.items
            ],
            "error": None if self.error is None else str(self.error),
        }
