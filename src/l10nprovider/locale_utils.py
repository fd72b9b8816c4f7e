"""Locale utilities: identifier normalization, system languages, display names.

Centralizes locale format handling used by the provider. Language
identifiers inside the provider keep the spelling of their .lproj
directories (BCP-47 style, e.g. "pt-BR", "zh-Hans"); Babel wants POSIX
spelling, so conversion happens only at the Babel boundary.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_display_name",
    "get_system_languages",
    "normalize_locale",
    "to_language_identifier",
]

logger = logging.getLogger(__name__)

_PSEUDO_LOCALES = frozenset({"C", "POSIX", ""})


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def to_language_identifier(locale_code: str) -> str:
    """Convert POSIX locale code to the hyphenated identifier used by bundles.

    Strips any encoding or modifier suffix ("de_DE.UTF-8@euro" -> "de-DE").

    Example:
        >>> to_language_identifier("de_DE.UTF-8")
        'de-DE'
    """
    code = locale_code.split(".", 1)[0].split("@", 1)[0]
    return code.replace("_", "-")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_display_name(locale_code: str) -> str | None:
    """Return the locale's name in its own language, capitalized.

    Args:
        locale_code: Language identifier (e.g., "cs", "pt-BR")

    Returns:
        Display name such as "Čeština", or None when Babel does not know
        the locale.

    Example:
        >>> get_display_name("de")
        'Deutsch'
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug("No display name for locale '%s': %s", locale_code, e)
        return None
    name = locale.get_display_name(locale)
    if not name:
        return None
    return name[:1].upper() + name[1:]


def get_system_languages() -> list[str]:
    """Detect the platform's ordered list of preferred languages.

    Detection order:
    1. LANGUAGE environment variable (GNU colon-separated priority list)
    2. Python locale.getlocale() (OS-level locale)
    3. LC_ALL, LC_MESSAGES, LANG environment variables

    "C" and "POSIX" pseudo-locales are ignored. Identifiers are returned in
    hyphenated form ("de-DE"), duplicates removed, order preserved.

    Returns:
        Ordered list of language identifiers; empty when nothing is set.

    Example:
        >>> import os
        >>> os.environ["LANGUAGE"] = "cs:sk:en"
        >>> get_system_languages()[:3]
        ['cs', 'sk', 'en']
    """
    import locale as locale_module  # noqa: PLC0415

    candidates: list[str] = []

    language_list = os.environ.get("LANGUAGE", "")
    candidates.extend(item for item in language_list.split(":") if item)

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale:
            candidates.append(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value:
            candidates.append(value)

    result = [
        to_language_identifier(code)
        for code in candidates
        if code.split(".", 1)[0] not in _PSEUDO_LOCALES
    ]
    # dict.fromkeys() removes duplicates while maintaining insertion order
    return list(dict.fromkeys(code for code in result if code))
