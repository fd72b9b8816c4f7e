"""Supported-language computation and effective-language resolution.

Components:
    build_supported_set - Languages offered by every configured table
    build_available_list - Supported languages ordered for presentation
    try_map_language - Accept a candidate directly or through mappings
    resolve_language - Walk the fallback chain to exactly one language

All functions are pure; the provider calls them under its lock.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence, Set

from l10nprovider.constants import FALLBACK_LANGUAGE, TABLE_INFO_KEY
from l10nprovider.localization.types import LanguageCode, ScanResult

__all__ = [
    "build_available_list",
    "build_supported_set",
    "resolve_language",
    "try_map_language",
]

logger = logging.getLogger(__name__)


def build_supported_set(scans: Iterable[ScanResult]) -> frozenset[LanguageCode]:
    """Return languages present in every scan result.

    The TABLE_INFO_KEY entry never takes part. With no scan results the
    set is empty, not universal.

    Example:
        >>> build_supported_set([{"en": "a", "cs": "b"}, {"en": "c"}])
        frozenset({'en'})
    """
    supported: set[LanguageCode] | None = None
    for scan in scans:
        languages = set(scan.keys())
        languages.discard(TABLE_INFO_KEY)
        if supported is None:
            supported = languages
        else:
            supported &= languages
    return frozenset(supported or ())


def build_available_list(
    supported: Set[LanguageCode],
    preferred: Iterable[LanguageCode] | None = None,
) -> list[LanguageCode]:
    """Order supported languages for presentation.

    Preferred languages that are supported come first, in the given order
    and without duplicates; the rest follow sorted by code point.

    Example:
        >>> build_available_list({"de", "cs", "en", "fr"}, ["en", "xx", "de", "en"])
        ['en', 'de', 'cs', 'fr']
    """
    remaining = set(supported)
    result: list[LanguageCode] = []
    for language in preferred or ():
        if language in remaining:
            result.append(language)
            remaining.remove(language)
    result.extend(sorted(remaining))
    return result


def try_map_language(
    candidate: LanguageCode | None,
    supported: Set[LanguageCode],
    mappings: Mapping[LanguageCode, LanguageCode] | None,
) -> LanguageCode | None:
    """Validate candidate against supported, falling back to its mapping.

    Returns:
        candidate if supported, else mappings[candidate] if that is
        supported, else None
    """
    if not candidate:
        return None
    if candidate in supported:
        return candidate
    if mappings is not None:
        mapped = mappings.get(candidate)
        if mapped is not None and mapped in supported:
            return mapped
    return None


def resolve_language(
    requested: LanguageCode | None,
    supported: Set[LanguageCode],
    *,
    mappings: Mapping[LanguageCode, LanguageCode] | None = None,
    system_languages: Sequence[LanguageCode] | None = None,
    default_language: LanguageCode | None = None,
    development_region: LanguageCode | None = None,
    available: Sequence[LanguageCode] = (),
) -> LanguageCode:
    """Resolve the effective language through the fallback chain.

    Candidates, first acceptable wins (each tried directly, then mapped):
        1. requested (explicit user choice)
        2. first system language
        3. default_language
        4. development_region
    Then the first available language, then FALLBACK_LANGUAGE.

    With an empty supported set the result is FALLBACK_LANGUAGE.

    Example:
        >>> resolve_language(None, {"es", "fr"}, system_languages=["fr"],
        ...                  default_language="es")
        'fr'
        >>> resolve_language(None, {"es", "fr"}, system_languages=["de"],
        ...                  mappings={"de": "es"}, default_language="fr")
        'es'
    """
    if not supported:
        logger.warning(
            "Localization configuration appears to be broken. Defaulting to '%s'",
            FALLBACK_LANGUAGE,
        )
        return FALLBACK_LANGUAGE

    system_language = system_languages[0] if system_languages else None
    for candidate in (requested, system_language, default_language, development_region):
        language = try_map_language(candidate, supported, mappings)
        if language is not None:
            return language

    # Out of options: first available language
    if available:
        return available[0]
    return FALLBACK_LANGUAGE
