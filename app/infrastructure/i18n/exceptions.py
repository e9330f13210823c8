"""Custom exceptions for the i18n system."""


class TranslationError(Exception):
    """Base exception for all translation-related errors."""


class LanguageConfigurationError(TranslationError):
    """Raised when no active language is configured.

    There is no valid text to render in that situation, so the error is
    surfaced instead of silently defaulted.

    Example:
        >>> await directory.resolve_language("fr")
        Traceback (most recent call last):
        ...
        LanguageConfigurationError: No active languages are configured
    """
