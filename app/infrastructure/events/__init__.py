"""In-process event system.

Usage:

    from infrastructure.events import BUNDLE_INVALIDATED, Event, register_event_handler

    @register_event_handler(BUNDLE_INVALIDATED)
    def purge_edge_cache(event: Event) -> None:
        for cache_key in event.metadata["cache_keys"]:
            ...
"""

from infrastructure.events.dispatcher import (
    clear_handlers,
    dispatch_event,
    get_handlers_for_event,
    register_event_handler,
)
from infrastructure.events.models import BUNDLE_INVALIDATED, Event, bundle_invalidated

__all__ = [
    "BUNDLE_INVALIDATED",
    "Event",
    "bundle_invalidated",
    "clear_handlers",
    "dispatch_event",
    "get_handlers_for_event",
    "register_event_handler",
]
