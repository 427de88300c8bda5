"""
Public surface for itemstore.
Importing this module does **not** open a database; construct a
`RecordStore` during application start-up.
"""

from .core.record import Item
from .core.state import StorePhase, StoreState
from .errors import BackendError, ItemStoreError, NilContextError
from .manager import RecordStore
from .persistence.store import ItemRepository, SqlItemRepository

__all__ = [
    "BackendError",
    "Item",
    "ItemRepository",
    "ItemStoreError",
    "NilContextError",
    "RecordStore",
    "SqlItemRepository",
    "StorePhase",
    "StoreState",
]
