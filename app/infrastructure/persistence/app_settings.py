"""Generic key/value application settings store.

Values are JSON-encoded into the ``app_setting`` table. The same store holds
regular application settings and, under a key prefix, persisted translation
bundle snapshots.
"""

import json
from typing import Any, List, Optional

from infrastructure.logging import get_module_logger
from infrastructure.persistence.database import Database

logger = get_module_logger()


class AppSettingsStore:
    """JSON key/value access to the ``app_setting`` table.

    Usage:
        store = AppSettingsStore(database)
        await store.set("feature.maintenance", {"enabled": True})
        value = await store.get("feature.maintenance")
    """

    def __init__(self, database: Database):
        self._database = database

    async def get(self, key: str) -> Optional[Any]:
        """Return the decoded value for ``key`` or None when absent."""
        row = await self._database.fetch_one(
            "SELECT value FROM app_setting WHERE key = ?", (key,)
        )
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError:
            logger.warning("app_setting_not_json", key=key)
            return None

    async def set(self, key: str, value: Any) -> None:
        """Insert or replace the value stored under ``key``."""
        await self._database.execute(
            """
            INSERT INTO app_setting (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT (key) DO UPDATE SET
                value = excluded.value,
                updated_at = CURRENT_TIMESTAMP
            """,
            (key, json.dumps(value, ensure_ascii=False)),
        )

    async def delete(self, key: str) -> None:
        await self._database.execute("DELETE FROM app_setting WHERE key = ?", (key,))

    async def list_keys(self, prefix: str = "") -> List[str]:
        """Return every stored key starting with ``prefix``."""
        rows = await self._database.fetch_all(
            "SELECT key FROM app_setting WHERE substr(key, 1, ?) = ? ORDER BY key",
            (len(prefix), prefix),
        )
        return [row["key"] for row in rows]
