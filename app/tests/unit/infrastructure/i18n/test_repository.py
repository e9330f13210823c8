"""Tests for infrastructure.i18n.repository module."""

import pytest

from infrastructure.persistence import DataStoreError
from tests.factories.i18n import make_definition

pytestmark = pytest.mark.unit


class TestTranslationRepository:
    """Tests for TranslationRepository over a real database."""

    @pytest.mark.asyncio
    async def test_fetch_rows_joins_overrides_for_language(self, repository, directory):
        english = await directory.add_language("en", "English", is_default=True)
        french = await directory.add_language("fr", "French")
        await repository.upsert_keys(
            [
                make_definition("b.key", "B default"),
                make_definition("a.key", "A default"),
            ]
        )
        await repository.set_translation_value("a.key", french.id, "A français")

        french_rows = await repository.fetch_rows(french.id)
        english_rows = await repository.fetch_rows(english.id)

        assert [(row.key, row.value, row.resolved) for row in french_rows] == [
            ("a.key", "A français", "A français"),
            ("b.key", None, "B default"),
        ]
        assert [row.resolved for row in english_rows] == ["A default", "B default"]

    @pytest.mark.asyncio
    async def test_fetch_rows_for_keys_subset(self, repository, directory):
        french = await directory.add_language("fr", "French")
        await repository.upsert_keys(
            [make_definition(f"key.{i}", f"Text {i}") for i in range(5)]
        )

        rows = await repository.fetch_rows_for_keys(french.id, ["key.1", "key.3", "key.9"])

        assert sorted(row.key for row in rows) == ["key.1", "key.3"]

    @pytest.mark.asyncio
    async def test_fetch_rows_for_keys_chunks_large_lists(self, repository, directory):
        french = await directory.add_language("fr", "French")
        definitions = [make_definition(f"bulk.{i:04d}", f"Text {i}") for i in range(1200)]
        await repository.upsert_keys(definitions)

        rows = await repository.fetch_rows_for_keys(french.id, [d.key for d in definitions])

        assert len(rows) == 1200

    @pytest.mark.asyncio
    async def test_upsert_updates_description_but_keeps_default_text(self, repository):
        await repository.upsert_keys([make_definition("greeting.title", "Hello", "Old")])
        await repository.upsert_keys([make_definition("greeting.title", "Howdy", "New")])

        registered = await repository.fetch_registered_keys(["greeting.title"])

        assert registered["greeting.title"].default_text == "Hello"
        assert registered["greeting.title"].description == "New"

    @pytest.mark.asyncio
    async def test_upsert_empty_is_noop(self, repository):
        await repository.upsert_keys([])
        assert await repository.fetch_registered_keys(["anything"]) == {}

    @pytest.mark.asyncio
    async def test_set_translation_value_overwrites(self, repository, directory):
        french = await directory.add_language("fr", "French")
        await repository.upsert_keys([make_definition("greeting.title", "Hello")])

        await repository.set_translation_value("greeting.title", french.id, "Salut")
        await repository.set_translation_value("greeting.title", french.id, "Bonjour")

        rows = await repository.fetch_rows(french.id)
        assert [row.value for row in rows] == ["Bonjour"]

    @pytest.mark.asyncio
    async def test_set_translation_value_unknown_key(self, repository, directory):
        french = await directory.add_language("fr", "French")

        with pytest.raises(DataStoreError, match="not registered"):
            await repository.set_translation_value("missing", french.id, "x")
