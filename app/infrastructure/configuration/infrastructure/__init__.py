"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.database import DatabaseSettings
from infrastructure.configuration.infrastructure.translations import (
    TranslationSettings,
)

__all__ = [
    "DatabaseSettings",
    "TranslationSettings",
]
