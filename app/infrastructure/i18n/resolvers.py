"""Language resolution for determining which language a visitor sees.

Resolution order for a preferred code:
1. The preferred language, if it exists and is active
2. The active language flagged as default
3. The first active language by name
"""

import asyncio
import re
from typing import Optional

from infrastructure.i18n.exceptions import LanguageConfigurationError
from infrastructure.i18n.languages import LanguageDirectory
from infrastructure.i18n.models import LanguageOption, ResolvedLanguage
from infrastructure.logging import get_module_logger

logger = get_module_logger()

_CODE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{1,15}$")


def normalize_language_code(code: Optional[str]) -> Optional[str]:
    """Trim and lowercase ``code``; return None when absent or malformed.

    Args:
        code: Untrusted language code (query string, cookie, profile field).

    Returns:
        A 2-16 character lowercase code, or None.
    """
    if not isinstance(code, str):
        return None
    normalized = code.strip().lower()
    if not normalized:
        return None
    if not _CODE_PATTERN.match(normalized):
        logger.debug("ignored_malformed_language_code", code=code[:32])
        return None
    return normalized


class LanguageResolver:
    """Resolves the active language from a preferred code.

    Attributes:
        directory: Source of configured languages.
    """

    def __init__(self, directory: LanguageDirectory):
        self.directory = directory

    async def resolve_language(
        self, preferred_code: Optional[str] = None
    ) -> ResolvedLanguage:
        """Resolve the active language for a request.

        Args:
            preferred_code: Optional code requested by the caller.

        Returns:
            The active languages and the language to use.

        Raises:
            LanguageConfigurationError: If no active language exists.
            DataStoreError: If the language table cannot be read.
        """
        code = normalize_language_code(preferred_code)

        if code:
            languages, preferred = await asyncio.gather(
                self.directory.list_active_languages(),
                self.directory.get_language_by_code(code),
            )
        else:
            languages = await self.directory.list_active_languages()
            preferred = None

        fallback: Optional[LanguageOption] = next(
            (language for language in languages if language.is_default),
            languages[0] if languages else None,
        )
        active = preferred if preferred is not None and preferred.is_active else fallback

        if active is None:
            logger.error("no_active_languages_configured", preferred_code=code)
            raise LanguageConfigurationError("No active languages are configured")

        if code and active.code != code:
            logger.debug(
                "preferred_language_unavailable",
                preferred_code=code,
                resolved_code=active.code,
            )

        return ResolvedLanguage(languages=languages, active_language=active)
