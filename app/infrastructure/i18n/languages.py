"""Language directory backed by the ``language`` table."""

import uuid
from typing import List, Optional

import aiosqlite

from infrastructure.i18n.models import LanguageOption
from infrastructure.persistence import Database, DataStoreError

_COLUMNS = "id, code, name, is_default, is_active, sync_ui_language"


def _to_option(row: aiosqlite.Row) -> LanguageOption:
    return LanguageOption(
        id=row["id"],
        code=row["code"],
        name=row["name"],
        is_default=bool(row["is_default"]),
        is_active=bool(row["is_active"]),
        sync_ui_language=bool(row["sync_ui_language"]),
    )


class LanguageDirectory:
    """Read access to configured languages.

    Languages are created and edited by administrators; the translation core
    only reads them. ``add_language`` exists for bootstrap and seeding.
    """

    def __init__(self, database: Database):
        self._database = database

    async def list_active_languages(self) -> List[LanguageOption]:
        """Return active languages ordered by name."""
        rows = await self._database.fetch_all(
            f"SELECT {_COLUMNS} FROM language WHERE is_active = 1 ORDER BY name ASC"
        )
        return [_to_option(row) for row in rows]

    async def get_language_by_code(self, code: str) -> Optional[LanguageOption]:
        row = await self._database.fetch_one(
            f"SELECT {_COLUMNS} FROM language WHERE code = ? LIMIT 1",
            (code,),
        )
        return _to_option(row) if row is not None else None

    async def add_language(
        self,
        code: str,
        name: str,
        is_default: bool = False,
        is_active: bool = True,
        sync_ui_language: bool = False,
    ) -> LanguageOption:
        """Insert or update a language by code and return it."""
        normalized = code.strip().lower()
        await self._database.execute(
            """
            INSERT INTO language (id, code, name, is_default, is_active, sync_ui_language)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT (code) DO UPDATE SET
                name = excluded.name,
                is_default = excluded.is_default,
                is_active = excluded.is_active,
                sync_ui_language = excluded.sync_ui_language,
                updated_at = CURRENT_TIMESTAMP
            """,
            (
                str(uuid.uuid4()),
                normalized,
                name,
                int(is_default),
                int(is_active),
                int(sync_ui_language),
            ),
        )
        language = await self.get_language_by_code(normalized)
        if language is None:
            raise DataStoreError(f"Language '{normalized}' was not stored")
        return language
