"""i18n system - translation bundle resolution and caching.

Decides which language a visitor sees and supplies a complete key -> text
dictionary for it, even while the database is slow or down.

Main components:
- models: TranslationDefinition, LanguageOption, TranslationBundle
- resolvers: LanguageResolver picking the active language
- loader: DatabaseBundleLoader merging static text, seed phrases and overrides
- cache: TranslationCache with stale-while-revalidate and snapshots
- registrar: TranslationKeyRegistrar for key registration and publishing
- service: TranslationService facade used by routes and jobs
"""

from infrastructure.i18n.cache import CachedBundle, TranslationCache
from infrastructure.i18n.exceptions import LanguageConfigurationError, TranslationError
from infrastructure.i18n.factory import create_translation_cache, create_translation_service
from infrastructure.i18n.languages import LanguageDirectory
from infrastructure.i18n.loader import BundleLoader, DatabaseBundleLoader
from infrastructure.i18n.models import (
    DEFAULT_CACHE_KEY,
    LanguageOption,
    ResolvedLanguage,
    TranslationBundle,
    TranslationDefinition,
    cache_key_for,
)
from infrastructure.i18n.registrar import TranslationKeyRegistrar
from infrastructure.i18n.repository import TranslationRepository
from infrastructure.i18n.resolvers import LanguageResolver, normalize_language_code
from infrastructure.i18n.service import TranslationService
from infrastructure.i18n.snapshots import BundleSnapshotStore
from infrastructure.i18n.static_bundle import build_fallback_bundle
from infrastructure.i18n.static_definitions import STATIC_TRANSLATION_DEFINITIONS

__all__ = [
    "DEFAULT_CACHE_KEY",
    "STATIC_TRANSLATION_DEFINITIONS",
    "BundleLoader",
    "BundleSnapshotStore",
    "CachedBundle",
    "DatabaseBundleLoader",
    "LanguageConfigurationError",
    "LanguageDirectory",
    "LanguageOption",
    "LanguageResolver",
    "ResolvedLanguage",
    "TranslationBundle",
    "TranslationCache",
    "TranslationDefinition",
    "TranslationError",
    "TranslationKeyRegistrar",
    "TranslationRepository",
    "TranslationService",
    "build_fallback_bundle",
    "cache_key_for",
    "create_translation_cache",
    "create_translation_service",
    "normalize_language_code",
]
