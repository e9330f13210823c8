"""Hardcoded bundle served when the database cannot be reached.

Building it performs no I/O, so it is always available synchronously.
"""

from typing import Dict, List, Optional

from infrastructure.i18n.models import LanguageOption, TranslationBundle
from infrastructure.i18n.static_definitions import (
    SEED_PHRASES,
    build_static_dictionary,
)

STATIC_LANGUAGES: List[LanguageOption] = [
    LanguageOption(
        id="static-en",
        code="en",
        name="English",
        is_default=True,
        is_active=True,
        sync_ui_language=True,
    ),
    LanguageOption(
        id="static-kha",
        code="kha",
        name="Khasi",
        is_default=False,
        is_active=True,
        sync_ui_language=True,
    ),
]

STATIC_DEFAULT_LANGUAGE = STATIC_LANGUAGES[0]

STATIC_DICTIONARY: Dict[str, str] = build_static_dictionary()


def build_fallback_bundle(
    preferred_code: Optional[str] = None,
    static_dictionary: Optional[Dict[str, str]] = None,
    seed_phrases: Optional[Dict[str, Dict[str, str]]] = None,
    languages: Optional[List[LanguageOption]] = None,
) -> TranslationBundle:
    """Build a bundle from static data only.

    The active language is the static language matching ``preferred_code``,
    else the static default. Seed phrases enumerated for that language are
    layered over the static dictionary.

    Args:
        preferred_code: Requested language code, if any.
        static_dictionary: Baseline dictionary (defaults to the shipped one).
        seed_phrases: Per-language seed phrases (defaults to the shipped table).
        languages: Languages to offer (defaults to the static language list).

    Returns:
        A complete TranslationBundle.
    """
    languages = list(languages or STATIC_LANGUAGES)
    base = STATIC_DICTIONARY if static_dictionary is None else static_dictionary
    seeds = SEED_PHRASES if seed_phrases is None else seed_phrases

    code = preferred_code.strip().lower() if isinstance(preferred_code, str) else ""
    default = next((lang for lang in languages if lang.is_default), languages[0])
    active = next((lang for lang in languages if lang.code == code), default)

    dictionary = dict(base)
    dictionary.update(seeds.get(active.code, {}))

    return TranslationBundle(
        languages=languages,
        active_language=active,
        dictionary=dictionary,
    )
