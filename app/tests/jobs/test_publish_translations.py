"""Tests for the translation publish job."""

import pytest
import pytest_asyncio

from infrastructure.configuration import DatabaseSettings, Settings
from infrastructure.i18n import (
    STATIC_TRANSLATION_DEFINITIONS,
    LanguageConfigurationError,
    LanguageDirectory,
    TranslationRepository,
)
from infrastructure.persistence import AppSettingsStore, Database
from jobs.publish_translations import main, publish_translations

pytestmark = pytest.mark.unit


def _settings(path: str) -> Settings:
    return Settings(PREFIX="test-", database=DatabaseSettings(DATABASE_PATH=path))


@pytest_asyncio.fixture
async def languages(database):
    directory = LanguageDirectory(database)
    await directory.add_language("en", "English", is_default=True)
    await directory.add_language("fr", "French")
    return database


class TestPublishTranslations:
    @pytest.mark.asyncio
    async def test_registers_keys_and_warms_bundles(self, languages):
        count = await publish_translations(_settings(languages.path), database=languages)

        assert count == 3
        registered = await TranslationRepository(languages).fetch_registered_keys(
            [definition.key for definition in STATIC_TRANSLATION_DEFINITIONS]
        )
        assert len(registered) == len(STATIC_TRANSLATION_DEFINITIONS)
        assert await AppSettingsStore(languages).list_keys("i18n.bundle:") == [
            "i18n.bundle:__default",
            "i18n.bundle:en",
            "i18n.bundle:fr",
        ]

    @pytest.mark.asyncio
    async def test_initializes_new_database(self, tmp_path):
        path = str(tmp_path / "fresh" / "app.db")

        with pytest.raises(LanguageConfigurationError):
            await publish_translations(_settings(path))

        assert await Database(path).fetch_all("SELECT * FROM language") == []


class TestMain:
    def test_success_exit_code(self, languages):
        assert main(_settings(languages.path)) == 0

    def test_failure_exit_code(self, tmp_path):
        assert main(_settings(str(tmp_path / "empty.db"))) == 1

    def test_unreachable_database_exit_code(self, tmp_path):
        assert main(_settings(str(tmp_path))) == 1
