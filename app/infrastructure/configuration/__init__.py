"""Infrastructure configuration module - public API.

This module provides centralized configuration management using Pydantic
BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    DatabaseSettings: Relational store settings class
    TranslationSettings: Translation cache settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    timeout = settings.translations.query_timeout_seconds
    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure import (
    DatabaseSettings,
    TranslationSettings,
)

__all__ = ["Settings", "DatabaseSettings", "TranslationSettings"]
