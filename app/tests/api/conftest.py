"""Fixtures for API route tests."""

from contextlib import ExitStack

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.router import api_router
from infrastructure.configuration import DatabaseSettings, Settings
from infrastructure.i18n import LanguageDirectory, TranslationRepository, create_translation_service
from infrastructure.services import get_settings, get_translation_service
from tests.factories.i18n import make_definition, make_translation_settings


@pytest_asyncio.fixture
async def seeded_database(database):
    """English (default) and French, with a French greeting override."""
    directory = LanguageDirectory(database)
    repository = TranslationRepository(database)
    await directory.add_language("en", "English", is_default=True)
    french = await directory.add_language("fr", "French")
    await repository.upsert_keys([make_definition("greeting.title", "Hello there!")])
    await repository.set_translation_value("greeting.title", french.id, "Bonjour !")
    return database


@pytest.fixture
def make_client():
    """Build a TestClient whose translation service uses ``database``."""
    stack = ExitStack()

    def _factory(database, git_sha="Unknown"):
        settings = Settings(
            PREFIX="test-",
            GIT_SHA=git_sha,
            database=DatabaseSettings(DATABASE_PATH=database.path),
            translations=make_translation_settings(),
        )
        service = create_translation_service(settings, database=database)

        app = FastAPI()
        app.include_router(api_router)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_translation_service] = lambda: service
        return stack.enter_context(TestClient(app))

    with stack:
        yield _factory


@pytest.fixture
def client(make_client, seeded_database):
    return make_client(seeded_database)
