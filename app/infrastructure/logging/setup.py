"""Structlog configuration and logger setup.

Every log line carries the deployment context (``git_sha``, ``environment``)
plus whatever request context was bound with ``bind_request_context``.
Development renders to the console, production emits JSON.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging(settings=settings)

    logger = get_module_logger()
    logger.info("translation_bundle_refreshed", cache_key="fr")
"""

import inspect
import logging
import sys
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _deployment_context(settings: Optional["Settings"]) -> Processor:
    """Build a processor stamping deployment metadata on every event."""
    context: Dict[str, Any] = {}
    if settings is not None:
        context["git_sha"] = settings.GIT_SHA
        context["environment"] = settings.PREFIX.rstrip("-") or "production"

    def add_deployment_context(logger, method_name, event_dict):
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_deployment_context


def _build_processors(settings: Optional["Settings"], prod_mode: bool) -> List[Processor]:
    processors: List[Processor] = [
        # Correlation id and request metadata
        structlog.contextvars.merge_contextvars,
        _deployment_context(settings),
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def _silence_for_tests() -> BoundLogger:
    logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.get_logger()


def configure_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the standard library root logger.

    Args:
        settings: Application settings. Loaded from the environment when
            neither override below is provided.
        log_level: Overrides ``settings.LOG_LEVEL``.
        is_production: Overrides ``settings.is_production``; selects JSON
            instead of console output.

    Returns:
        Configured logger instance. Output is suppressed under pytest.
    """
    if _is_test_environment():
        return _silence_for_tests()

    if settings is None and (log_level is None or is_production is None):
        from infrastructure.configuration import Settings

        settings = Settings()

    prod_mode = is_production if is_production is not None else settings.is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=_build_processors(settings, prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
        force=True,
    )

    return structlog.stdlib.get_logger()


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger, bound to ``logger_name`` when a name is given."""
    logger = structlog.stdlib.get_logger()
    if name:
        return logger.bind(logger_name=name)
    return logger


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Example:
        # In infrastructure/i18n/cache.py
        logger = get_module_logger()
        # context: {"component": "cache", "module_path": "infrastructure.i18n.cache"}
    """
    logger = structlog.stdlib.get_logger()

    caller = inspect.currentframe()
    caller = caller.f_back if caller is not None else None
    if caller is None:
        return logger

    module = inspect.getmodule(caller)
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(component=module.__name__.rsplit(".", 1)[-1], module_path=module.__name__)
