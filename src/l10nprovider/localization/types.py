"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating LocalizationProvider call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import TypeAlias

__all__ = [
    "LanguageCode",
    "ScanResult",
    "StringTable",
    "TableName",
    "TranslationKey",
]

LanguageCode: TypeAlias = str
"""Language identifier as spelled by its .lproj directory (e.g., 'en', 'pt-BR')."""

TranslationKey: TypeAlias = str
"""Lookup key in a string table (e.g., 'greeting', 'language.cs')."""

TableName: TypeAlias = str
"""String table name without extension (e.g., 'Localizable')."""

StringTable: TypeAlias = dict[TranslationKey, str]
"""Flat key -> translated string mapping."""

ScanResult: TypeAlias = Mapping[LanguageCode, str]
"""Language -> resource path for one table, plus the TABLE_INFO_KEY entry."""
