"""Deadline guard for awaitables that cannot be cancelled safely.

``with_timeout`` races an operation against a deadline. Whichever finishes
first wins. When the deadline wins, the operation is abandoned rather than
cancelled: it keeps running on the event loop and its eventual result or
exception is discarded. Only wrap operations that are safe to let complete
unobserved, such as read-only, idempotent queries.
"""

import asyncio
from typing import Awaitable, Optional, Set, TypeVar

from infrastructure.logging import get_module_logger

logger = get_module_logger()

T = TypeVar("T")

# Strong references to abandoned operations so the loop does not garbage
# collect them before they finish.
_ABANDONED: Set["asyncio.Future"] = set()


class OperationTimeoutError(Exception):
    """Raised when a guarded operation misses its deadline.

    Attributes:
        label: Human-readable name of the operation.
        timeout_seconds: The deadline that was exceeded.
    """

    def __init__(self, label: str, timeout_seconds: float):
        self.label = label
        self.timeout_seconds = timeout_seconds
        super().__init__(f"{label} timed out after {timeout_seconds:.3f}s")


def _release(future: "asyncio.Future") -> None:
    _ABANDONED.discard(future)
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.debug(
            "abandoned_operation_failed",
            error=str(exc),
            error_type=type(exc).__name__,
        )


async def with_timeout(
    operation: Awaitable[T],
    timeout_seconds: Optional[float],
    label: str = "operation",
) -> T:
    """Await ``operation`` for at most ``timeout_seconds``.

    Args:
        operation: Coroutine or future to await.
        timeout_seconds: Deadline in seconds. ``None`` or a non-positive
            value disables the deadline.
        label: Name used in the raised error and in logs.

    Returns:
        The operation's result.

    Raises:
        OperationTimeoutError: If the deadline elapsed first.
        Exception: Whatever the operation raised, if it finished first.
    """
    future = asyncio.ensure_future(operation)

    if timeout_seconds is None or timeout_seconds <= 0:
        return await future

    try:
        return await asyncio.wait_for(asyncio.shield(future), timeout_seconds)
    except asyncio.TimeoutError as exc:
        _ABANDONED.add(future)
        future.add_done_callback(_release)
        raise OperationTimeoutError(label, timeout_seconds) from exc
