"""Persisted bundle snapshots stored in the application settings table.

A snapshot lets a fresh process serve a warm bundle before its first live
load completes. Each one is stored under ``<prefix><cache key>`` as::

    {"cachedAt": "2024-05-01T10:00:00+00:00", "bundle": {...}}
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from infrastructure.i18n.models import TranslationBundle
from infrastructure.logging import get_module_logger
from infrastructure.persistence import AppSettingsStore

logger = get_module_logger()


@dataclass(frozen=True)
class BundleSnapshot:
    """A persisted bundle with its capture time (epoch seconds)."""

    bundle: TranslationBundle
    cached_at: float


class BundleSnapshotStore:
    """Reads and writes bundle snapshots through :class:`AppSettingsStore`."""

    def __init__(self, app_settings: AppSettingsStore, prefix: str = "i18n.bundle:"):
        self._app_settings = app_settings
        self.prefix = prefix

    def setting_key(self, cache_key: str) -> str:
        return f"{self.prefix}{cache_key}"

    async def read(self, cache_key: str) -> Optional[BundleSnapshot]:
        """Return the snapshot for ``cache_key``; malformed entries count as absent."""
        payload = await self._app_settings.get(self.setting_key(cache_key))
        if payload is None:
            return None

        try:
            cached_at = datetime.fromisoformat(payload["cachedAt"])
            if cached_at.tzinfo is None:
                cached_at = cached_at.replace(tzinfo=timezone.utc)
            bundle = TranslationBundle.from_dict(payload["bundle"])
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(
                "translation_snapshot_malformed", cache_key=cache_key, error=str(e)
            )
            return None

        return BundleSnapshot(bundle=bundle, cached_at=cached_at.timestamp())

    async def write(self, cache_key: str, bundle: TranslationBundle, cached_at: float) -> None:
        await self._app_settings.set(
            self.setting_key(cache_key),
            {
                "cachedAt": datetime.fromtimestamp(cached_at, tz=timezone.utc).isoformat(),
                "bundle": bundle.to_dict(),
            },
        )

    async def delete(self, cache_key: str) -> None:
        await self._app_settings.delete(self.setting_key(cache_key))

    async def list_cache_keys(self) -> List[str]:
        """Cache keys that currently have a persisted snapshot."""
        keys = await self._app_settings.list_keys(self.prefix)
        return [key[len(self.prefix) :] for key in keys]
