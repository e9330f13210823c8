"""Cooldown circuit breaker guarding database access.

A single hard failure opens the breaker for ``cooldown_seconds``. While open,
callers are expected to skip the guarded resource entirely and serve cached
or static data. Any later success closes it immediately. Timeouts are not
failures from the breaker's point of view: callers simply do not report them.
"""

import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class CircuitState(str, Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"


class CircuitBreaker:
    """Process-local "blocked until" gate with an injectable clock.

    Attributes:
        name: Breaker name used in logs and stats.
        cooldown_seconds: How long the breaker stays open after a failure.
    """

    def __init__(
        self,
        name: str,
        cooldown_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ):
        self.name = name
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._blocked_until: Optional[float] = None
        self._failure_count = 0
        self._last_error: Optional[str] = None

    @property
    def state(self) -> CircuitState:
        if self._blocked_until is not None and self._clock() < self._blocked_until:
            return CircuitState.OPEN
        return CircuitState.CLOSED

    @property
    def blocked_until(self) -> Optional[float]:
        return self._blocked_until

    def should_skip(self) -> bool:
        """Return True while the cooldown window is still running."""
        if self._blocked_until is None:
            return False
        if self._clock() < self._blocked_until:
            return True
        logger.info("circuit_breaker_cooldown_elapsed", name=self.name)
        self._blocked_until = None
        return False

    def mark_failure(self, error: Optional[BaseException] = None) -> None:
        """Open the breaker until ``now + cooldown_seconds``."""
        self._failure_count += 1
        self._last_error = str(error) if error is not None else None
        self._blocked_until = self._clock() + self.cooldown_seconds
        logger.warning(
            "circuit_breaker_opened",
            name=self.name,
            cooldown_seconds=self.cooldown_seconds,
            failure_count=self._failure_count,
            error=self._last_error,
        )

    def clear_failure(self) -> None:
        """Close the breaker without waiting for the cooldown."""
        if self._blocked_until is not None:
            logger.info("circuit_breaker_closed", name=self.name)
        self._blocked_until = None
        self._failure_count = 0
        self._last_error = None

    def get_stats(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "state": self.state.value,
            "failure_count": self._failure_count,
            "blocked_until": self._blocked_until,
            "cooldown_seconds": self.cooldown_seconds,
            "last_error": self._last_error,
        }
