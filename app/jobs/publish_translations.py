"""Register static translation keys and warm every bundle after a deploy.

Usage:
    python -m jobs.publish_translations

Exits with status 1 when registration or any bundle load fails.
"""

import asyncio
import sys
from typing import Optional

from infrastructure.configuration import Settings
from infrastructure.i18n import create_translation_service
from infrastructure.logging import configure_logging, get_module_logger
from infrastructure.persistence import Database

logger = get_module_logger()


async def publish_translations(settings: Settings, database: Optional[Database] = None) -> int:
    """Publish translations and return the number of warmed bundles.

    Raises:
        Exception: Any registration or load failure.
    """
    database = database or Database(settings.database.path)
    await database.initialize()

    service = create_translation_service(settings, database=database)
    bundles = await service.publish_all_translations()
    await service.cache.wait_for_refreshes()

    logger.info(
        "translations_publish_completed",
        bundles=len(bundles),
        languages=sorted({bundle.active_language.code for bundle in bundles}),
    )
    return len(bundles)


def main(settings: Optional[Settings] = None) -> int:
    settings = settings or Settings()
    configure_logging(settings=settings)

    try:
        asyncio.run(publish_translations(settings))
    except Exception as e:  # pylint: disable=broad-except
        logger.error("translations_publish_failed", error=str(e), exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
