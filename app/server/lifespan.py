import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_database, get_settings, get_translation_service

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

# Upper bound on waiting for background bundle refreshes at shutdown.
SHUTDOWN_DRAIN_SECONDS = 5.0


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(settings=settings)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    await get_database().initialize()
    translations = get_translation_service()
    app.state.translations = translations

    yield

    logger.info("application_shutdown")

    try:
        await asyncio.wait_for(
            translations.cache.wait_for_refreshes(), SHUTDOWN_DRAIN_SECONDS
        )
    except asyncio.TimeoutError:
        logger.warning("translation_refreshes_abandoned_at_shutdown")
