"""Translation models for the i18n system.

Defines the core data structures for translation keys, languages and the
resolved bundles handed to callers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_CACHE_KEY = "__default"


def cache_key_for(code: Optional[str]) -> str:
    """Derive the cache key shared by memory, snapshots and invalidation.

    Args:
        code: Preferred language code, possibly absent or padded.

    Returns:
        The trimmed, lowercased code, or ``"__default"`` when empty.
    """
    normalized = code.strip().lower() if isinstance(code, str) else ""
    return normalized or DEFAULT_CACHE_KEY


@dataclass(frozen=True)
class TranslationDefinition:
    """A translatable string known at build time.

    Attributes:
        key: Stable dot-separated identifier (e.g., "greeting.title").
        default_text: Text shown when no override exists.
        description: Context for translators.
    """

    key: str
    default_text: str
    description: Optional[str] = None


@dataclass(frozen=True)
class LanguageOption:
    """A language row as seen by the translation core (read-only).

    Attributes:
        id: Primary key of the language row.
        code: Unique lowercase code (2-16 characters).
        name: Display name.
        is_default: Exactly one active language carries this flag.
        is_active: Whether visitors may select the language.
        sync_ui_language: Whether selecting the language also switches UI text.
    """

    id: str
    code: str
    name: str
    is_default: bool = False
    is_active: bool = True
    sync_ui_language: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "isDefault": self.is_default,
            "isActive": self.is_active,
            "syncUiLanguage": self.sync_ui_language,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LanguageOption":
        """Deserialize a language from its ``to_dict`` form.

        Raises:
            ValueError: If ``id``, ``code`` or ``name`` is missing.
        """
        try:
            return cls(
                id=str(data["id"]),
                code=str(data["code"]),
                name=str(data["name"]),
                is_default=bool(data.get("isDefault", False)),
                is_active=bool(data.get("isActive", True)),
                sync_ui_language=bool(data.get("syncUiLanguage", False)),
            )
        except KeyError as e:
            raise ValueError(f"Missing language field: {e}") from e


@dataclass(frozen=True)
class ResolvedLanguage:
    """Outcome of language resolution for one request."""

    languages: List[LanguageOption]
    active_language: LanguageOption


@dataclass(frozen=True)
class TranslationBundle:
    """Resolved translations for one request's language.

    The unit of caching and the unit returned to callers. Bundles are never
    mutated after construction; the cache swaps whole bundles.

    Attributes:
        languages: Active languages available for selection.
        active_language: Language the dictionary was resolved for.
        dictionary: Resolved text per translation key.
    """

    languages: List[LanguageOption]
    active_language: LanguageOption
    dictionary: Dict[str, str] = field(default_factory=dict)

    def translate(self, key: str, default: Optional[str] = None) -> str:
        """Look up ``key``, falling back to ``default`` and then the key itself."""
        value = self.dictionary.get(key)
        if value:
            return value
        return default if default is not None else key

    def to_dict(self) -> Dict[str, Any]:
        return {
            "languages": [language.to_dict() for language in self.languages],
            "activeLanguage": self.active_language.to_dict(),
            "dictionary": dict(self.dictionary),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranslationBundle":
        """Deserialize a bundle from its ``to_dict`` form.

        Raises:
            ValueError: If the payload is not a well-formed bundle.
        """
        if not isinstance(data, dict):
            raise ValueError("Bundle payload must be a mapping")

        dictionary = data.get("dictionary")
        languages = data.get("languages")
        active = data.get("activeLanguage")
        if not isinstance(dictionary, dict) or not isinstance(languages, list):
            raise ValueError("Bundle payload is missing dictionary or languages")
        if not isinstance(active, dict):
            raise ValueError("Bundle payload is missing activeLanguage")

        return cls(
            languages=[LanguageOption.from_dict(entry) for entry in languages],
            active_language=LanguageOption.from_dict(active),
            dictionary={str(k): str(v) for k, v in dictionary.items()},
        )
