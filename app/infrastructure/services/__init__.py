"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    DatabaseDep,
    SettingsDep,
    TranslationServiceDep,
)
from infrastructure.services.providers import (
    get_database,
    get_settings,
    get_translation_service,
)

__all__ = [
    "SettingsDep",
    "DatabaseDep",
    "TranslationServiceDep",
    "get_settings",
    "get_database",
    "get_translation_service",
]
