"""Translation service for dependency injection.

Provides the public entry points of the i18n system. Nothing here lets a
translation failure reach the caller: the worst case is static default text.

Usage:
    # Via dependency injection
    from infrastructure.services import TranslationServiceDep

    @router.get("/greeting")
    async def greeting(translations: TranslationServiceDep):
        bundle = await translations.get_translation_bundle("fr")
        return {"title": bundle.translate("greeting.title")}
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from infrastructure.i18n.cache import TranslationCache
from infrastructure.i18n.exceptions import LanguageConfigurationError
from infrastructure.i18n.models import (
    ResolvedLanguage,
    TranslationBundle,
    TranslationDefinition,
)
from infrastructure.i18n.registrar import TranslationKeyRegistrar, dedupe_definitions
from infrastructure.i18n.repository import TranslationRepository
from infrastructure.i18n.resolvers import LanguageResolver
from infrastructure.i18n.static_bundle import STATIC_LANGUAGES, build_fallback_bundle
from infrastructure.logging import get_module_logger
from infrastructure.resilience import OperationTimeoutError, with_timeout

logger = get_module_logger()


class TranslationService:
    """Class-based facade over the cache, resolver, repository and registrar.

    This is a thin facade: caching, loading and registration live in the
    collaborators wired together by ``create_translation_service``.
    """

    def __init__(
        self,
        cache: TranslationCache,
        resolver: LanguageResolver,
        repository: TranslationRepository,
        registrar: TranslationKeyRegistrar,
        query_timeout_seconds: float,
        is_production: bool = False,
    ):
        self.cache = cache
        self.resolver = resolver
        self.repository = repository
        self.registrar = registrar
        self._query_timeout_seconds = query_timeout_seconds
        self._is_production = is_production

    async def get_translation_bundle(
        self, preferred_code: Optional[str] = None
    ) -> TranslationBundle:
        """Return the bundle for ``preferred_code`` (primary entry point)."""
        try:
            return await self.cache.get(preferred_code)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("translation_bundle_unavailable", error=str(e))
            return build_fallback_bundle(preferred_code)

    async def resolve_language(self, preferred_code: Optional[str] = None) -> ResolvedLanguage:
        """Resolve the active language, serving static languages on store errors.

        Raises:
            LanguageConfigurationError: If no active language is configured.
        """
        try:
            return await self.resolver.resolve_language(preferred_code)
        except LanguageConfigurationError:
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error("language_resolution_failed", error=str(e))
            fallback = build_fallback_bundle(preferred_code)
            return ResolvedLanguage(
                languages=list(STATIC_LANGUAGES),
                active_language=fallback.active_language,
            )

    async def get_translation_for_key(
        self, code: Optional[str], definition: TranslationDefinition
    ) -> str:
        translations = await self.get_translations_for_keys(code, [definition])
        return translations.get(definition.key, definition.default_text)

    async def get_translations_for_keys(
        self, code: Optional[str], definitions: Sequence[TranslationDefinition]
    ) -> Dict[str, str]:
        """Look up a handful of keys without building a full bundle.

        The definitions are registered first so new keys become visible to
        translators. Any failure, timeout or open breaker yields the
        definitions' default texts.

        Returns:
            Resolved text per key, in definition order.
        """
        unique = dedupe_definitions(definitions)
        defaults = {definition.key: definition.default_text for definition in unique}
        if not unique:
            return defaults

        if self.cache.breaker.should_skip():
            return defaults

        try:
            translations = await with_timeout(
                self._lookup(code, unique),
                self._query_timeout_seconds,
                label="translation key lookup",
            )
        except OperationTimeoutError as e:
            if not self._is_production:
                logger.warning(
                    "translation_lookup_timed_out",
                    keys=len(unique),
                    timeout_seconds=e.timeout_seconds,
                )
            return defaults
        except LanguageConfigurationError as e:
            logger.error("translation_language_configuration_error", error=str(e))
            return defaults
        except Exception as e:  # pylint: disable=broad-except
            self.cache.breaker.mark_failure(e)
            logger.error("translation_lookup_failed", keys=len(unique), error=str(e))
            return defaults

        self.cache.breaker.clear_failure()
        return translations

    async def _lookup(
        self, code: Optional[str], definitions: List[TranslationDefinition]
    ) -> Dict[str, str]:
        await self.registrar.register_translation_keys(definitions)
        resolved = await self.resolver.resolve_language(code)
        rows = await self.repository.fetch_rows_for_keys(
            resolved.active_language.id, [d.key for d in definitions]
        )
        by_key = {row.key: row for row in rows}

        translations: Dict[str, str] = {}
        for definition in definitions:
            row = by_key.get(definition.key)
            if row is None:
                translations[definition.key] = definition.default_text
            elif row.value is not None:
                translations[definition.key] = row.value
            elif row.default_text is not None:
                translations[definition.key] = row.default_text
            else:
                translations[definition.key] = definition.default_text
        return translations

    async def invalidate_translation_bundle_cache(
        self, codes: Optional[Iterable[str]] = None
    ) -> List[str]:
        return await self.cache.invalidate(codes)

    async def register_translation_keys(
        self, definitions: Sequence[TranslationDefinition]
    ) -> int:
        """Register definitions; failures are logged and reported as 0 writes."""
        try:
            return await self.registrar.register_translation_keys(definitions)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("translation_key_registration_failed", error=str(e))
            return 0

    def get_cache_status(self) -> Dict[str, Any]:
        return {
            "cached_keys": self.cache.cached_keys(),
            "circuit_breaker": self.cache.breaker.get_stats(),
            "skip_cache": self.cache.skip_cache,
        }

    async def publish_all_translations(self) -> List[TranslationBundle]:
        """Register static keys and warm every bundle. Failures propagate."""
        return await self.registrar.publish_all_translations()
