"""Registration of translation keys and post-deploy cache warming."""

from typing import Dict, List, Sequence

from infrastructure.i18n.cache import TranslationCache
from infrastructure.i18n.languages import LanguageDirectory
from infrastructure.i18n.models import TranslationBundle, TranslationDefinition
from infrastructure.i18n.repository import TranslationRepository
from infrastructure.i18n.static_definitions import STATIC_TRANSLATION_DEFINITIONS
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def dedupe_definitions(
    definitions: Sequence[TranslationDefinition],
) -> List[TranslationDefinition]:
    """Keep the last definition seen for each key, in first-seen order."""
    by_key: Dict[str, TranslationDefinition] = {}
    for definition in definitions:
        by_key[definition.key] = definition
    return list(by_key.values())


class TranslationKeyRegistrar:
    """Writes new or re-described keys and keeps the cache coherent.

    Existing keys are compared on ``description`` only. ``default_text`` is
    fixed at first insertion because translators' overrides were written
    against it.
    """

    def __init__(
        self,
        repository: TranslationRepository,
        directory: LanguageDirectory,
        cache: TranslationCache,
    ):
        self._repository = repository
        self._directory = directory
        self._cache = cache

    async def register_translation_keys(
        self, definitions: Sequence[TranslationDefinition]
    ) -> int:
        """Upsert changed definitions and invalidate every bundle on change.

        Returns:
            Number of definitions written.

        Raises:
            DataStoreError: If the key table cannot be read or written.
        """
        unique = dedupe_definitions(definitions)
        if not unique:
            return 0

        existing = await self._repository.fetch_registered_keys([d.key for d in unique])
        changed = [
            definition
            for definition in unique
            if definition.key not in existing
            or existing[definition.key].description != definition.description
        ]
        if not changed:
            return 0

        await self._repository.upsert_keys(changed)
        logger.info(
            "translation_keys_registered",
            written=len(changed),
            new=sum(1 for d in changed if d.key not in existing),
        )
        await self._cache.invalidate()
        return len(changed)

    async def publish_all_translations(self) -> List[TranslationBundle]:
        """Register the static key set and warm every active language.

        Loads bypass the cache, so the first request after a deploy is
        served from memory or a fresh snapshot.

        Returns:
            The warmed bundles, default first.

        Raises:
            Exception: Any registration or load failure.
        """
        await self.register_translation_keys(STATIC_TRANSLATION_DEFINITIONS)

        bundles = [await self._cache.refresh(None)]
        for language in await self._directory.list_active_languages():
            bundles.append(await self._cache.refresh(language.code))

        logger.info(
            "translations_published",
            keys=len(STATIC_TRANSLATION_DEFINITIONS),
            bundles=len(bundles),
        )
        return bundles
