"""Resilience patterns and implementations.

This module contains resilience-related infrastructure components: the
cooldown circuit breaker and the abandon-on-deadline timeout guard.
"""

from infrastructure.resilience.circuit_breaker import CircuitBreaker, CircuitState
from infrastructure.resilience.timeout import OperationTimeoutError, with_timeout

__all__ = [
    "CircuitBreaker",
    "CircuitState",
    "OperationTimeoutError",
    "with_timeout",
]
