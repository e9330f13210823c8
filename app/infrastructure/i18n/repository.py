"""Relational access to translation keys and per-language overrides."""

import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from infrastructure.i18n.models import TranslationDefinition
from infrastructure.persistence import Database, DataStoreError

# Stay well below SQLite's bound parameter limit.
_IN_CLAUSE_CHUNK = 500


@dataclass(frozen=True)
class TranslationRow:
    """A registered key joined with one language's override, if any."""

    key: str
    default_text: str
    value: Optional[str] = None

    @property
    def resolved(self) -> str:
        return self.value if self.value is not None else self.default_text


@dataclass(frozen=True)
class RegisteredKey:
    """Stored metadata of a registered translation key."""

    key: str
    default_text: str
    description: Optional[str]


def _chunks(items: Sequence[str], size: int = _IN_CLAUSE_CHUNK) -> Iterable[Sequence[str]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


class TranslationRepository:
    """Queries over ``translation_key`` and ``translation_value``."""

    _JOIN = """
        SELECT tk.key AS key, tk.default_text AS default_text, tv.value AS value
        FROM translation_key tk
        LEFT JOIN translation_value tv
            ON tv.translation_key_id = tk.id AND tv.language_id = ?
    """

    def __init__(self, database: Database):
        self._database = database

    async def fetch_rows(self, language_id: str) -> List[TranslationRow]:
        """Every registered key with ``language_id``'s override, by key."""
        rows = await self._database.fetch_all(
            f"{self._JOIN} ORDER BY tk.key ASC", (language_id,)
        )
        return [TranslationRow(row["key"], row["default_text"], row["value"]) for row in rows]

    async def fetch_rows_for_keys(
        self, language_id: str, keys: Sequence[str]
    ) -> List[TranslationRow]:
        result: List[TranslationRow] = []
        for chunk in _chunks(list(keys)):
            placeholders = ", ".join("?" for _ in chunk)
            rows = await self._database.fetch_all(
                f"{self._JOIN} WHERE tk.key IN ({placeholders})",
                (language_id, *chunk),
            )
            result.extend(
                TranslationRow(row["key"], row["default_text"], row["value"]) for row in rows
            )
        return result

    async def fetch_registered_keys(self, keys: Sequence[str]) -> Dict[str, RegisteredKey]:
        registered: Dict[str, RegisteredKey] = {}
        for chunk in _chunks(list(keys)):
            placeholders = ", ".join("?" for _ in chunk)
            rows = await self._database.fetch_all(
                "SELECT key, default_text, description FROM translation_key "
                f"WHERE key IN ({placeholders})",
                tuple(chunk),
            )
            for row in rows:
                registered[row["key"]] = RegisteredKey(
                    key=row["key"],
                    default_text=row["default_text"],
                    description=row["description"],
                )
        return registered

    async def upsert_keys(self, definitions: Sequence[TranslationDefinition]) -> None:
        """Insert new keys and refresh descriptions of existing ones.

        ``default_text`` is only written on first insertion so existing
        overrides keep the anchor they were translated from.
        """
        if not definitions:
            return
        await self._database.execute_many(
            """
            INSERT INTO translation_key (id, key, default_text, description)
            VALUES (?, ?, ?, ?)
            ON CONFLICT (key) DO UPDATE SET
                description = excluded.description,
                updated_at = CURRENT_TIMESTAMP
            """,
            [
                (str(uuid.uuid4()), d.key, d.default_text, d.description)
                for d in definitions
            ],
        )

    async def set_translation_value(self, key: str, language_id: str, value: str) -> None:
        """Store an override for a registered key (seeding helper).

        Raises:
            DataStoreError: If ``key`` is not registered.
        """
        row = await self._database.fetch_one(
            "SELECT id FROM translation_key WHERE key = ?", (key,)
        )
        if row is None:
            raise DataStoreError(f"Translation key '{key}' is not registered")

        await self._database.execute(
            """
            INSERT INTO translation_value (id, translation_key_id, language_id, value)
            VALUES (?, ?, ?, ?)
            ON CONFLICT (translation_key_id, language_id) DO UPDATE SET
                value = excluded.value,
                updated_at = CURRENT_TIMESTAMP
            """,
            (str(uuid.uuid4()), row["id"], language_id, value),
        )
