"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated

from fastapi import Depends

from infrastructure.configuration import Settings
from infrastructure.i18n import TranslationService
from infrastructure.persistence import Database
from infrastructure.services.providers import (
    get_database,
    get_settings,
    get_translation_service,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Shared database handle
DatabaseDep = Annotated[Database, Depends(get_database)]

# Translation service - bundle cache, point lookups and key registration
TranslationServiceDep = Annotated[TranslationService, Depends(get_translation_service)]

__all__ = [
    "SettingsDep",
    "DatabaseDep",
    "TranslationServiceDep",
]
