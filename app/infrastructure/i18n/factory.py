"""Factory functions for creating i18n components.

Wires the translation service from settings so callers never assemble the
cache, loader and registrar by hand.
"""

import time
from typing import Callable, List, Optional

from infrastructure.configuration import Settings, TranslationSettings
from infrastructure.events import bundle_invalidated, dispatch_event
from infrastructure.i18n.cache import InvalidationHook, TranslationCache
from infrastructure.i18n.languages import LanguageDirectory
from infrastructure.i18n.loader import BundleLoader, DatabaseBundleLoader
from infrastructure.i18n.registrar import TranslationKeyRegistrar
from infrastructure.i18n.repository import TranslationRepository
from infrastructure.i18n.resolvers import LanguageResolver
from infrastructure.i18n.service import TranslationService
from infrastructure.i18n.snapshots import BundleSnapshotStore
from infrastructure.logging import get_module_logger
from infrastructure.persistence import AppSettingsStore, Database

logger = get_module_logger()


def dispatch_invalidation(cache_keys: List[str]) -> None:
    """Announce invalidated bundles on the in-process event bus."""
    dispatch_event(bundle_invalidated(cache_keys))


def create_translation_cache(
    loader: BundleLoader,
    settings: TranslationSettings,
    snapshots: Optional[BundleSnapshotStore] = None,
    clock: Callable[[], float] = time.time,
    on_invalidate: Optional[InvalidationHook] = dispatch_invalidation,
    is_production: bool = False,
) -> TranslationCache:
    """Create a TranslationCache with its own circuit breaker."""
    return TranslationCache(
        loader=loader,
        settings=settings,
        snapshots=snapshots,
        clock=clock,
        on_invalidate=on_invalidate,
        is_production=is_production,
    )


def create_translation_service(
    settings: Settings,
    database: Optional[Database] = None,
    clock: Callable[[], float] = time.time,
    on_invalidate: Optional[InvalidationHook] = dispatch_invalidation,
) -> TranslationService:
    """Create and wire a TranslationService.

    Args:
        settings: Application settings (database path, translation tuning).
        database: Shared database; created from ``settings.database.path``
            when omitted.
        clock: Time source for TTL and breaker cooldown.
        on_invalidate: Hook receiving invalidated cache keys.

    Returns:
        TranslationService: Ready-to-use service. The schema must have been
        initialized with ``Database.initialize`` before the first request.

    Usage:
        service = create_translation_service(get_settings())
        bundle = await service.get_translation_bundle("fr")
    """
    database = database or Database(settings.database.path)
    translation_settings = settings.translations

    directory = LanguageDirectory(database)
    resolver = LanguageResolver(directory)
    repository = TranslationRepository(database)
    snapshots = BundleSnapshotStore(
        AppSettingsStore(database), prefix=translation_settings.snapshot_prefix
    )

    cache = create_translation_cache(
        loader=DatabaseBundleLoader(resolver, repository),
        settings=translation_settings,
        snapshots=snapshots,
        clock=clock,
        on_invalidate=on_invalidate,
        is_production=settings.is_production,
    )
    registrar = TranslationKeyRegistrar(repository, directory, cache)

    logger.info(
        "translation_service_created",
        database_path=database.path,
        cache_ttl_seconds=translation_settings.cache_ttl_seconds,
        skip_cache=translation_settings.skip_cache,
    )

    return TranslationService(
        cache=cache,
        resolver=resolver,
        repository=repository,
        registrar=registrar,
        query_timeout_seconds=translation_settings.query_timeout_seconds,
        is_production=settings.is_production,
    )
