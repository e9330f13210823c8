"""Shared fixtures for the test suite."""

import pytest
import pytest_asyncio

from infrastructure.events import clear_handlers
from infrastructure.persistence import AppSettingsStore, Database
from infrastructure.services import providers
from tests.factories.clock import FakeClock


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest_asyncio.fixture
async def database(tmp_path):
    """Initialized SQLite database in a temporary directory."""
    db = Database(str(tmp_path / "test.db"))
    await db.initialize()
    return db


@pytest.fixture
def app_settings(database):
    return AppSettingsStore(database)


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Reset process-wide singletons between tests."""
    clear_handlers()
    providers.get_settings.cache_clear()
    providers.get_database.cache_clear()
    providers.get_translation_service.cache_clear()
    yield
    clear_handlers()
    providers.get_settings.cache_clear()
    providers.get_database.cache_clear()
    providers.get_translation_service.cache_clear()
