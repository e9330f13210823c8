"""Tests for infrastructure.i18n.registrar module."""

from unittest.mock import AsyncMock

import pytest

from infrastructure.i18n import (
    DatabaseBundleLoader,
    LanguageConfigurationError,
    STATIC_TRANSLATION_DEFINITIONS,
    TranslationKeyRegistrar,
)
from infrastructure.i18n.registrar import dedupe_definitions
from tests.factories.i18n import make_definition

pytestmark = pytest.mark.unit


@pytest.fixture
def cache(make_cache, stub_loader, snapshots):
    return make_cache(stub_loader, snapshots=snapshots)


@pytest.fixture
def registrar(repository, directory, cache):
    repository.upsert_keys = AsyncMock(wraps=repository.upsert_keys)
    return TranslationKeyRegistrar(repository, directory, cache)


class TestDedupeDefinitions:
    """Tests for dedupe_definitions."""

    def test_last_definition_wins_in_first_seen_order(self):
        definitions = [
            make_definition("a", "A1"),
            make_definition("b", "B"),
            make_definition("a", "A2"),
        ]

        assert dedupe_definitions(definitions) == [
            make_definition("a", "A2"),
            make_definition("b", "B"),
        ]


class TestRegisterTranslationKeys:
    """Tests for TranslationKeyRegistrar.register_translation_keys."""

    @pytest.mark.asyncio
    async def test_new_keys_are_written_and_invalidate(
        self, registrar, repository, invalidations
    ):
        written = await registrar.register_translation_keys(
            [make_definition("a", "A"), make_definition("b", "B")]
        )

        assert written == 2
        assert set(await repository.fetch_registered_keys(["a", "b"])) == {"a", "b"}
        assert len(invalidations) == 1

    @pytest.mark.asyncio
    async def test_second_identical_call_writes_nothing(
        self, registrar, repository, invalidations
    ):
        definitions = [make_definition("a", "A", "First"), make_definition("b", "B", None)]

        await registrar.register_translation_keys(definitions)
        written = await registrar.register_translation_keys(definitions)

        assert written == 0
        assert repository.upsert_keys.await_count == 1
        assert len(invalidations) == 1

    @pytest.mark.asyncio
    async def test_only_changed_descriptions_are_written(
        self, registrar, repository, invalidations
    ):
        await registrar.register_translation_keys(
            [make_definition("a", "A", "Old"), make_definition("b", "B", "Same")]
        )

        written = await registrar.register_translation_keys(
            [make_definition("a", "A", "New"), make_definition("b", "B", "Same")]
        )

        assert written == 1
        repository.upsert_keys.assert_awaited_with([make_definition("a", "A", "New")])
        assert len(invalidations) == 2

    @pytest.mark.asyncio
    async def test_default_text_change_alone_is_ignored(self, registrar, repository):
        await registrar.register_translation_keys([make_definition("a", "Hello", "Same")])

        written = await registrar.register_translation_keys(
            [make_definition("a", "Howdy", "Same")]
        )

        assert written == 0
        registered = await repository.fetch_registered_keys(["a"])
        assert registered["a"].default_text == "Hello"

    @pytest.mark.asyncio
    async def test_registration_drops_cached_bundles(self, registrar, cache):
        await cache.get("fr")

        await registrar.register_translation_keys([make_definition("a", "A")])

        assert cache.cached_keys() == []

    @pytest.mark.asyncio
    async def test_empty_input(self, registrar, invalidations):
        assert await registrar.register_translation_keys([]) == 0
        assert invalidations == []


class TestPublishAllTranslations:
    """Tests for TranslationKeyRegistrar.publish_all_translations."""

    @pytest.fixture
    def publishing_registrar(self, make_cache, resolver, repository, directory, snapshots):
        cache = make_cache(DatabaseBundleLoader(resolver, repository), snapshots=snapshots)
        return TranslationKeyRegistrar(repository, directory, cache), cache

    @pytest.mark.asyncio
    async def test_registers_static_keys_and_warms_every_language(
        self, publishing_registrar, directory, repository, snapshots
    ):
        registrar, cache = publishing_registrar
        await directory.add_language("en", "English", is_default=True)
        await directory.add_language("fr", "French")
        await directory.add_language("de", "German", is_active=False)

        bundles = await registrar.publish_all_translations()

        assert [bundle.active_language.code for bundle in bundles] == ["en", "en", "fr"]
        keys = [definition.key for definition in STATIC_TRANSLATION_DEFINITIONS]
        assert len(await repository.fetch_registered_keys(keys)) == len(keys)
        assert cache.cached_keys() == ["__default", "en", "fr"]
        assert await snapshots.list_cache_keys() == ["__default", "en", "fr"]

    @pytest.mark.asyncio
    async def test_second_publish_reloads_without_invalidating(
        self, publishing_registrar, directory, invalidations
    ):
        registrar, _ = publishing_registrar
        await directory.add_language("en", "English", is_default=True)

        await registrar.publish_all_translations()
        await registrar.publish_all_translations()

        assert len(invalidations) == 1

    @pytest.mark.asyncio
    async def test_failures_propagate(self, publishing_registrar):
        registrar, _ = publishing_registrar

        with pytest.raises(LanguageConfigurationError):
            await registrar.publish_all_translations()
