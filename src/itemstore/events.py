"""
itemstore.events  ──  Change notifications for RecordStore observers
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List

EVENT_TYPES = ("change", "create", "delete", "error")


class EventRegistry:
    """Per-store registry of event handlers"""

    def __init__(self):
        # Maps event type -> handlers in registration order
        self._handlers: Dict[str, List[Callable]] = defaultdict(list)

    def register(self, event_type: str, handler: Callable) -> Callable[[], None]:
        """Register a handler and return a callable that removes it"""
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {event_type!r}")
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def emit(self, event_type: str, *args: Any) -> None:
        """Call every handler for ``event_type`` synchronously"""
        for handler in list(self._handlers[event_type]):
            handler(*args)


class OnDecorator:
    """Namespace for event decorators bound to one registry"""

    def __init__(self, registry: EventRegistry):
        self._registry = registry

    def _decorator(self, event_type: str) -> Callable:
        def decorator(func: Callable) -> Callable:
            self._registry.register(event_type, func)
            return func

        return decorator

    def change(self, func: Callable) -> Callable:
        """Handle a refreshed projection: ``func(store)``"""
        return self._decorator("change")(func)

    def create(self, func: Callable) -> Callable:
        """Handle a new item: ``func(store, item)``"""
        return self._decorator("create")(func)

    def delete(self, func: Callable) -> Callable:
        """Handle removed items: ``func(store, items)``"""
        return self._decorator("delete")(func)

    def error(self, func: Callable) -> Callable:
        """Handle a recorded error: ``func(store, error)``"""
        return self._decorator("error")(func)
