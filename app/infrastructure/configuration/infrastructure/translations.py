"""Translation bundle cache infrastructure settings."""

from typing import Any

import structlog
from pydantic import Field, ValidationInfo, field_validator

from infrastructure.configuration.base import InfrastructureSettings

logger = structlog.stdlib.get_logger().bind(component="config")

_TRUTHY = {"1", "true", "yes", "on"}


class TranslationSettings(InfrastructureSettings):
    """Timeouts, TTL and circuit breaker cooldown for translation bundles.

    Every duration is expressed in milliseconds. Values that are missing,
    non-numeric or not strictly positive fall back to the field default
    instead of failing application startup.

    Environment Variables:
        TRANSLATION_QUERY_TIMEOUT_MS: Deadline for a single translation query,
            snapshot read/write and background refresh (default: 1500)
        TRANSLATION_INITIAL_LOAD_TIMEOUT_MS: Deadline for the synchronous load
            performed when nothing is cached yet (default: 5000)
        TRANSLATION_CACHE_TTL_MS: Age after which a cached bundle is refreshed
            in the background (default: 300000 = 5min)
        TRANSLATION_FAILURE_COOLDOWN_MS: How long database access is skipped
            after a hard failure (default: 60000 = 1min)
        SKIP_TRANSLATION_CACHE: Bypass cached bundles and always load live
            (default: False)
        TRANSLATION_SNAPSHOT_PREFIX: Key prefix for persisted bundle snapshots
            in the application settings store (default: "i18n.bundle:")

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        ttl = settings.translations.cache_ttl_seconds
        ```
    """

    query_timeout_ms: int = Field(
        default=1500,
        alias="TRANSLATION_QUERY_TIMEOUT_MS",
        description="Per-query deadline (milliseconds)",
    )
    initial_load_timeout_ms: int = Field(
        default=5000,
        alias="TRANSLATION_INITIAL_LOAD_TIMEOUT_MS",
        description="Cold-start live load deadline (milliseconds)",
    )
    cache_ttl_ms: int = Field(
        default=300_000,
        alias="TRANSLATION_CACHE_TTL_MS",
        description="Age before a cached bundle is revalidated (milliseconds)",
    )
    failure_cooldown_ms: int = Field(
        default=60_000,
        alias="TRANSLATION_FAILURE_COOLDOWN_MS",
        description="Database skip window after a hard failure (milliseconds)",
    )
    skip_cache: bool = Field(
        default=False,
        alias="SKIP_TRANSLATION_CACHE",
        description="Bypass cached bundles entirely",
    )
    snapshot_prefix: str = Field(
        default="i18n.bundle:",
        alias="TRANSLATION_SNAPSHOT_PREFIX",
        description="Application settings key prefix for bundle snapshots",
    )

    @field_validator(
        "query_timeout_ms",
        "initial_load_timeout_ms",
        "cache_ttl_ms",
        "failure_cooldown_ms",
        mode="before",
    )
    @classmethod
    def _positive_int_or_default(cls, value: Any, info: ValidationInfo) -> int:
        default = cls.model_fields[info.field_name].default
        if value is None or isinstance(value, bool):
            return default
        try:
            parsed = int(str(value).strip())
        except ValueError:
            logger.warning(
                "invalid_translation_setting",
                setting=info.field_name,
                value=str(value),
                fallback=default,
            )
            return default
        if parsed <= 0:
            logger.warning(
                "non_positive_translation_setting",
                setting=info.field_name,
                value=parsed,
                fallback=default,
            )
            return default
        return parsed

    @field_validator("skip_cache", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() in _TRUTHY

    @property
    def query_timeout_seconds(self) -> float:
        return self.query_timeout_ms / 1000

    @property
    def initial_load_timeout_seconds(self) -> float:
        return self.initial_load_timeout_ms / 1000

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_ms / 1000

    @property
    def failure_cooldown_seconds(self) -> float:
        return self.failure_cooldown_ms / 1000
