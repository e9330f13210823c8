"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.i18n import TranslationService, create_translation_service
from infrastructure.persistence import Database


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Infrastructure packages should use this directly:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return {"ttl": settings.translations.cache_ttl_ms}

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_database() -> Database:
    """Get the application-scoped database handle."""
    return Database(get_settings().database.path)


@lru_cache
def get_translation_service() -> TranslationService:
    """
    Get application-scoped translation service singleton.

    One instance per process means one in-memory bundle cache and one
    circuit breaker shared by every request.

    Returns:
        TranslationService: Service wired to the shared database.

    Usage:
        @router.get("/bundle")
        async def bundle(translations: TranslationServiceDep):
            return (await translations.get_translation_bundle()).to_dict()
    """
    return create_translation_service(get_settings(), database=get_database())
