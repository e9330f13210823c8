"""Bundle loading interface and the database-backed implementation.

Defines the contract the cache uses to build a bundle from the source of
truth.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

from infrastructure.i18n.models import TranslationBundle, TranslationDefinition
from infrastructure.i18n.repository import TranslationRepository
from infrastructure.i18n.resolvers import LanguageResolver
from infrastructure.i18n.static_definitions import (
    SEED_PHRASES,
    STATIC_TRANSLATION_DEFINITIONS,
    build_static_dictionary,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class BundleLoader(ABC):
    """Abstract base for bundle loaders.

    Implementations perform the live load that the cache de-duplicates,
    time-boxes and guards with the circuit breaker.
    """

    @abstractmethod
    async def load_bundle(self, preferred_code: Optional[str] = None) -> TranslationBundle:
        """Build a complete bundle for ``preferred_code``.

        Raises:
            LanguageConfigurationError: If no active language exists.
            DataStoreError: If the store cannot be read.
        """


class DatabaseBundleLoader(BundleLoader):
    """Builds bundles from the language, key and override tables.

    Dictionary layering, lowest precedence first:
    1. Static definitions shipped with the application
    2. Seed phrases enumerated for the active language
    3. Database rows: the override when present, else the key's default text

    Attributes:
        resolver: Picks the active language.
        repository: Reads keys and overrides.
    """

    def __init__(
        self,
        resolver: LanguageResolver,
        repository: TranslationRepository,
        static_definitions: Sequence[TranslationDefinition] = STATIC_TRANSLATION_DEFINITIONS,
        seed_phrases: Optional[Dict[str, Dict[str, str]]] = None,
    ):
        self.resolver = resolver
        self.repository = repository
        self._static_dictionary = build_static_dictionary(tuple(static_definitions))
        self._seed_phrases = SEED_PHRASES if seed_phrases is None else seed_phrases

    async def load_bundle(self, preferred_code: Optional[str] = None) -> TranslationBundle:
        resolved = await self.resolver.resolve_language(preferred_code)
        active = resolved.active_language

        rows = await self.repository.fetch_rows(active.id)

        dictionary = dict(self._static_dictionary)
        dictionary.update(self._seed_phrases.get(active.code, {}))
        for row in rows:
            dictionary[row.key] = row.resolved

        logger.debug(
            "translation_bundle_loaded",
            language=active.code,
            rows=len(rows),
            keys=len(dictionary),
        )
        return TranslationBundle(
            languages=resolved.languages,
            active_language=active,
            dictionary=dictionary,
        )
