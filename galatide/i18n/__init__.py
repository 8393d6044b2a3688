"""
i18n (Internationalization) package

Locale helpers, built-in language metadata, RTL detection and
Accept-Language header parsing.
"""

from .locale import (
    BUILTIN_LANGUAGES,
    RTL_LOCALES,
    get_language_info,
    is_rtl_locale,
    parse_accept_language,
)

__all__ = [
    "BUILTIN_LANGUAGES",
    "RTL_LOCALES",
    "get_language_info",
    "is_rtl_locale",
    "parse_accept_language",
]
