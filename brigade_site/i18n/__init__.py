"""
i18n package

Locale selection and localized-field helpers for the German/English site.
"""

from .locale import (
    DEFAULT_LOCALE,
    LANGUAGE_NAMES,
    SUPPORTED_LOCALES,
    alternate_locale,
    get_language_info,
    has_localized_text,
    localized_value,
    normalize_locale,
    parse_accept_language,
    resolve_locale,
)

__all__ = [
    "DEFAULT_LOCALE",
    "LANGUAGE_NAMES",
    "SUPPORTED_LOCALES",
    "alternate_locale",
    "get_language_info",
    "has_localized_text",
    "localized_value",
    "normalize_locale",
    "parse_accept_language",
    "resolve_locale",
]
