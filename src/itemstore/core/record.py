"""
Item kernel – *pure Pydantic* (no SQLAlchemy imports).

An Item is created once with an identity and a UTC timestamp and is never
mutated afterwards.
"""

from __future__ import annotations

import datetime as dt
import uuid

from pydantic import BaseModel, Field, field_validator


def now_utc() -> dt.datetime:  # compact timezone‑aware timestamp
    return dt.datetime.now(tz=dt.timezone.utc)


class Item(BaseModel):
    """Immutable timestamped record."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    timestamp: dt.datetime = Field(default_factory=now_utc)

    model_config = {"frozen": True, "from_attributes": True}

    # SQLite hands back naive datetimes; everything is stored as UTC
    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: dt.datetime) -> dt.datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value.astimezone(dt.timezone.utc)

    def label(self) -> str:
        """Numeric date plus standard time, as shown in the list view."""
        return self.timestamp.strftime("%m/%d/%Y, %H:%M:%S")
