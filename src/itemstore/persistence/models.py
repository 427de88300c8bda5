"""
Single-table schema: every Item lives here.
"""

import uuid

from sqlalchemy import Column, DateTime, Integer, Uuid
from sqlalchemy.orm import declarative_base

from ..core.record import now_utc

Base = declarative_base()


class ItemRow(Base):
    """Single table that stores **all** items."""

    __tablename__ = "items"

    # insertion order, used to break timestamp ties
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(Uuid(as_uuid=True), nullable=False, unique=True, default=uuid.uuid4)
    timestamp = Column(DateTime(timezone=True), default=now_utc, nullable=False, index=True)
