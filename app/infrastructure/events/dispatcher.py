"""Event dispatcher for the in-process event system.

Handlers are registered with a decorator and called synchronously, in
registration order, when an event of their type is dispatched.
"""

from typing import Any, Callable, Dict, List

from infrastructure.events.models import Event
from infrastructure.logging import get_module_logger

logger = get_module_logger()

EventHandler = Callable[[Event], Any]

# event_type -> handlers
EVENT_HANDLERS: Dict[str, List[EventHandler]] = {}


def register_event_handler(event_type: str):
    """Decorator registering a handler for ``event_type``."""

    def decorator(handler_func: EventHandler) -> EventHandler:
        EVENT_HANDLERS.setdefault(event_type, []).append(handler_func)
        logger.debug(
            "registered_event_handler",
            handler=getattr(handler_func, "__name__", "unknown"),
            event_type=event_type,
            total_handlers=len(EVENT_HANDLERS[event_type]),
        )
        return handler_func

    return decorator


def dispatch_event(event: Event) -> List[Any]:
    """Call every handler registered for the event's type.

    A failing handler is logged and skipped; the remaining handlers still run.

    Returns:
        Return values of the handlers that succeeded.
    """
    results = []
    handlers = EVENT_HANDLERS.get(event.event_type, [])

    logger.debug(
        "dispatching_event",
        event_type=event.event_type,
        handler_count=len(handlers),
        correlation_id=str(event.correlation_id),
    )

    for handler in handlers:
        try:
            results.append(handler(event))
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "event_handler_failed",
                handler=getattr(handler, "__name__", "unknown"),
                event_type=event.event_type,
                error=str(e),
                correlation_id=str(event.correlation_id),
            )

    return results


def get_handlers_for_event(event_type: str) -> List[EventHandler]:
    return list(EVENT_HANDLERS.get(event_type, []))


def clear_handlers() -> None:
    """Remove every registered handler (tests only)."""
    EVENT_HANDLERS.clear()
