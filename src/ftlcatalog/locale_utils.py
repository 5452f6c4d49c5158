"""Locale tag utilities.

Centralizes locale tag normalization used throughout the codebase.
Every locale entering the system (configuration, directory names, query
arguments) is canonicalized once at the boundary, then compared by exact
string equality.

Canonical form is BCP-47 style with hyphens: language lowercase, script
titlecase, region and variant uppercase ("en", "zh-Hant-TW", "fr-CA").
Syntax is validated with Babel's identifier parser; no CLDR data lookup
is performed, so syntactically valid but unknown languages are accepted.

Python 3.13+.
"""

from __future__ import annotations

import functools

from babel.core import parse_locale

from ftlcatalog.diagnostics import LocaleParseError

__all__ = [
    "canonicalize_locale",
    "region_of",
    "strip_region",
]

_LOCALE_SEPARATOR: str = "-"


@functools.lru_cache(maxsize=256)
def _parse(tag: str) -> tuple[str, str | None, str | None, str | None]:
    """Parse a tag into (language, territory, script, variant).

    Raises:
        LocaleParseError: If the tag is not a valid language identifier
    """
    if not tag or tag != tag.strip():
        raise LocaleParseError(tag, "empty or surrounded by whitespace")
    # Babel accepts POSIX encodings and modifiers ("de_DE.UTF-8@euro");
    # those are not language identifiers.
    if "." in tag or "@" in tag:
        raise LocaleParseError(tag, "encodings and modifiers are not allowed")

    try:
        parts = parse_locale(tag.replace("_", _LOCALE_SEPARATOR), sep=_LOCALE_SEPARATOR)
    except ValueError as e:
        raise LocaleParseError(tag, str(e)) from e

    language, territory, script, variant = parts[:4]
    # BCP-47 primary language subtag: 2-3 letters, or 5-8 registered letters
    if not (2 <= len(language) <= 3 or 5 <= len(language) <= 8):
        raise LocaleParseError(tag, f"invalid language subtag {language!r}")
    return language, territory, script, variant


def canonicalize_locale(tag: str) -> str:
    """Return the canonical form of a locale tag.

    Args:
        tag: Locale tag with "-" or "_" separators (e.g., "en-us", "pt_BR")

    Returns:
        Canonical tag (e.g., "en-US", "pt-BR")

    Raises:
        LocaleParseError: If the tag is not a valid language identifier

    Example:
        >>> canonicalize_locale("en_us")
        'en-US'
        >>> canonicalize_locale("zh-hant-tw")
        'zh-Hant-TW'
    """
    language, territory, script, variant = _parse(tag)
    return _LOCALE_SEPARATOR.join(
        part for part in (language, script, territory, variant) if part is not None
    )


def region_of(tag: str) -> str | None:
    """Return the region subtag of a locale, or None if it has none.

    Raises:
        LocaleParseError: If the tag is not a valid language identifier
    """
    return _parse(tag)[1]


def strip_region(tag: str) -> str:
    """Return the locale without its region subtag.

    Script and variant subtags are kept: "sr-Latn-RS" becomes "sr-Latn".

    Raises:
        LocaleParseError: If the tag is not a valid language identifier

    Example:
        >>> strip_region("en-CA")
        'en'
    """
    language, _territory, script, variant = _parse(tag)
    return _LOCALE_SEPARATOR.join(
        part for part in (language, script, variant) if part is not None
    )
