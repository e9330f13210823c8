"""Feature-level fixtures for i18n system tests.

Provides a seeded database and wired services for resolution, loading,
caching and registration scenarios.
"""

from typing import List

import pytest
import pytest_asyncio

from infrastructure.configuration import DatabaseSettings, Settings
from infrastructure.i18n import (
    BundleSnapshotStore,
    LanguageDirectory,
    LanguageResolver,
    TranslationCache,
    TranslationRepository,
    create_translation_service,
)
from tests.factories.i18n import (
    StubBundleLoader,
    make_definition,
    make_translation_settings,
)


@pytest.fixture
def directory(database):
    return LanguageDirectory(database)


@pytest.fixture
def repository(database):
    return TranslationRepository(database)


@pytest.fixture
def resolver(directory):
    return LanguageResolver(directory)


@pytest.fixture
def snapshots(app_settings):
    return BundleSnapshotStore(app_settings, prefix="i18n.bundle:")


@pytest_asyncio.fixture
async def seeded_database(database, directory, repository):
    """English (default) and French, with a French greeting override.

    Registered keys:
    - greeting.title: "Hello there!" (fr override "Bonjour !")
    """
    await directory.add_language("en", "English", is_default=True)
    french = await directory.add_language("fr", "French")
    await repository.upsert_keys([make_definition("greeting.title", "Hello there!")])
    await repository.set_translation_value("greeting.title", french.id, "Bonjour !")
    return database


@pytest.fixture
def invalidations() -> List[List[str]]:
    """Cache keys received by the invalidation hook, one list per call."""
    return []


@pytest.fixture
def stub_loader():
    return StubBundleLoader()


@pytest.fixture
def make_cache(fake_clock, invalidations):
    """Factory building a TranslationCache around a loader."""

    def _factory(loader, snapshots=None, **settings_overrides):
        return TranslationCache(
            loader=loader,
            settings=make_translation_settings(**settings_overrides),
            snapshots=snapshots,
            clock=fake_clock,
            on_invalidate=invalidations.append,
        )

    return _factory


@pytest.fixture
def make_service(fake_clock, invalidations):
    """Factory building a fully wired TranslationService over a database."""

    def _factory(database, **settings_overrides):
        settings = Settings(
            PREFIX="test-",
            database=DatabaseSettings(DATABASE_PATH=database.path),
            translations=make_translation_settings(**settings_overrides),
        )
        return create_translation_service(
            settings,
            database=database,
            clock=fake_clock,
            on_invalidate=invalidations.append,
        )

    return _factory
