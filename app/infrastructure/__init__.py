"""Infrastructure modules for the translation bundle service.

Centralized infrastructure components:
- configuration: Settings management (Settings, TranslationSettings)
- logging: Structured logging (get_module_logger, bind_request_context)
- events: In-process event system
- i18n: Language resolution, bundle loading and caching
- persistence: SQLite database and application settings store
- resilience: Circuit breaker and timeout guard
- services: Dependency injection services (SettingsDep, TranslationServiceDep, get_settings)
"""

# Configuration
from infrastructure.configuration import Settings

# Observability
from infrastructure.logging import get_module_logger

# Dependency Injection Services
from infrastructure.services import (
    SettingsDep,
    TranslationServiceDep,
    get_settings,
    get_translation_service,
)

__all__ = [
    # Configuration
    "Settings",
    # Observability
    "get_module_logger",
    # Dependency Injection Services
    "SettingsDep",
    "TranslationServiceDep",
    "get_settings",
    "get_translation_service",
]
