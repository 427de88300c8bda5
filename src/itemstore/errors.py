"""
Error taxonomy for the item store.

Store operations never raise these across the store boundary; they are
recorded into ``RecordStore.error`` instead.
"""

from __future__ import annotations


class ItemStoreError(Exception):
    """Base class for every failure the store records."""


class NilContextError(ItemStoreError):
    """An operation ran while the store had no connection handle."""

    def __init__(self, message: str = "store has no open container") -> None:
        super().__init__(message)


class BackendError(ItemStoreError):
    """Wraps a failure raised by the persistence backend."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")
