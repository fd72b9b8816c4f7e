"""String-table discovery and merging.

Components:
    StringsLoader - Protocol for reading one resource file into a StringTable
    StringsFileLoader - Disk-based loader for .strings / plist resources
    scan_table - Find every language variant of one table in its bundle
    scan_tables - scan_table over a configuration's tables, in order
    TableLoadResult - Immutable result of loading one table for one language
    MergeResult - Merged StringTable plus the per-table load results
    merge_tables - Merge all tables for one language, later tables winning

Scanning is soft-fail: an unreadable bundle yields no languages rather
than an error. Merging never raises either; failures are recorded in the
returned MergeResult and the caller decides whether to commit.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import plistlib
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from l10nprovider.constants import (
    BASE_LOCALE_DIR,
    LOCALE_DIR_SUFFIX,
    STRINGS_EXTENSION,
    TABLE_INFO_KEY,
)
from l10nprovider.enums import LoadStatus
from l10nprovider.errors import StringsSyntaxError
from l10nprovider.localization.configuration import LocalizationTable
from l10nprovider.localization.strings_format import parse_strings_data
from l10nprovider.localization.types import LanguageCode, ScanResult, StringTable, TableName

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "StringsLoader",
    # Concrete loader
    "StringsFileLoader",
    # Scanner
    "scan_table",
    "scan_tables",
    # Merger
    "TableLoadResult",
    "MergeResult",
    "merge_tables",
]

logger = logging.getLogger(__name__)

# Errors a loader may raise for a broken resource
_LOAD_ERRORS = (
    OSError,
    UnicodeDecodeError,
    StringsSyntaxError,
    plistlib.InvalidFileException,
    ValueError,
)


class StringsLoader(Protocol):
    """Protocol for reading one translation resource.

    This is a Protocol (structural typing) rather than ABC so tests and
    applications can plug in any reader.

    Example:
        >>> class JsonLoader:
        ...     def load(self, path: str) -> dict[str, str]:
        ...         return json.loads(Path(path).read_text(encoding="utf-8"))
    """

    def load(self, path: str) -> StringTable:
        """Load the resource at path into a flat key -> value dictionary.

        Raises:
            FileNotFoundError: If the resource doesn't exist
            OSError: If the file cannot be read
            StringsSyntaxError: If the content is malformed
        """
        ...


class StringsFileLoader:
    """Loads .strings files (old-style, XML or binary property lists) from disk."""

    __slots__ = ()

    def load(self, path: str) -> StringTable:
        """Read and parse the resource at path.

        Raises:
            FileNotFoundError: If file doesn't exist
            OSError: If file cannot be read
            StringsSyntaxError: If old-style content is malformed
            plistlib.InvalidFileException: If an XML/binary plist is corrupt
            UnicodeDecodeError: If text cannot be decoded
        """
        data = Path(path).read_bytes()
        return parse_strings_data(data, source_path=path)


# ============================================================================
# TABLE SCANNER
# ============================================================================


def scan_table(table: LocalizationTable, default_language: LanguageCode) -> dict[str, str]:
    """Find every language variant of one table.

    Looks for ``<bundle>/<language>.lproj/<table.name>.strings``. The
    ``Base.lproj`` directory is reported as ``default_language``.

    Args:
        table: Table descriptor
        default_language: Identifier that "Base" stands for

    Returns:
        Dictionary of language -> resource path, plus TABLE_INFO_KEY mapped
        to the table name. An unreadable bundle yields only the info entry.
    """
    bundle_path = table.bundle.path
    file_name = f"{table.name}{STRINGS_EXTENSION}"
    result: dict[str, str] = {}

    try:
        entries = sorted(bundle_path.iterdir())
    except OSError as e:
        logger.warning(
            "Unable to read bundle %s for table '%s': %s",
            table.bundle.describe(),
            table.name,
            e,
        )
        entries = []

    for entry in entries:
        if not entry.name.endswith(LOCALE_DIR_SUFFIX):
            continue
        table_path = entry / file_name
        if not table_path.is_file():
            continue
        language = entry.name.removesuffix(LOCALE_DIR_SUFFIX)
        if not language:
            continue
        if language == BASE_LOCALE_DIR:
            language = default_language
        result[language] = str(table_path)

    if result:
        logger.debug("Table '%s' has localizations:", table.name)
        for language, path in result.items():
            logger.debug("     - %s  :  %s", language, path)
    else:
        logger.debug(
            "No localized files found in table '%s', bundle: %s",
            table.name,
            table.bundle.describe(),
        )

    result[TABLE_INFO_KEY] = table.name
    return result


def scan_tables(
    tables: Iterable[LocalizationTable], default_language: LanguageCode
) -> list[dict[str, str]]:
    """Scan every table, preserving configuration order."""
    return [scan_table(table, default_language) for table in tables]


# ============================================================================
# TABLE MERGER
# ============================================================================


@dataclass(frozen=True, slots=True)
class TableLoadResult:
    """Result of loading one string table for one language.

    Attributes:
        table_name: Table name from the scan result
        language: Language that was requested
        status: Load status (success, not_found, error)
        path: Resource path, when the table has the language
        error: Exception if status is ERROR, None otherwise
        key_count: Number of entries contributed by the table
    """

    table_name: TableName
    language: LanguageCode
    status: LoadStatus
    path: str | None = None
    error: Exception | None = None
    key_count: int = 0

    @property
    def is_success(self) -> bool:
        """Check if the table loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the table has no resource for the language."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the resource could not be read or parsed."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Merged string table for one language plus per-table outcomes.

    ``translations`` is populated best-effort even when a table failed, so
    it can be inspected; it must only be committed when ``success`` is True.

    Attributes:
        language: Language that was merged
        translations: Merged key -> value mapping
        results: One TableLoadResult per table, in configuration order
    """

    language: LanguageCode
    translations: StringTable
    results: tuple[TableLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"MergeResult(language={self.language!r}, "
            f"keys={len(self.translations)}, "
            f"tables={len(self.results)}, "
            f"success={self.success})"
        )

    @property
    def success(self) -> bool:
        """True if every table loaded for the language."""
        return all(r.is_success for r in self.results)

    def get_failures(self) -> tuple[TableLoadResult, ...]:
        """Get all results that did not load successfully."""
        return tuple(r for r in self.results if not r.is_success)


def merge_tables(
    scans: Sequence[ScanResult],
    language: LanguageCode,
    loader: StringsLoader,
) -> MergeResult:
    """Load every table for language and merge them into one dictionary.

    Tables are merged in the given order; a key defined by several tables
    takes the value from the last one. A table without the language, or
    whose resource fails to load, contributes nothing and marks the merge
    unsuccessful; remaining tables are still merged.

    Args:
        scans: Scan results in configuration order
        language: Resolved language to load
        loader: Resource reader

    Returns:
        MergeResult with the merged table and per-table outcomes
    """
    translations: StringTable = {}
    results: list[TableLoadResult] = []

    for scan in scans:
        table_name = scan.get(TABLE_INFO_KEY, "<unknown>")
        path = scan.get(language) if language != TABLE_INFO_KEY else None
        if path is None:
            logger.warning("String table '%s' has no localization for '%s'", table_name, language)
            results.append(TableLoadResult(table_name, language, LoadStatus.NOT_FOUND))
            continue

        table_id = f"'{table_name} @ {language}'"
        logger.debug("Loading string table %s from file: %s", table_id, path)
        try:
            entries = loader.load(path)
        except FileNotFoundError as e:
            logger.warning("Unable to load string table %s from file: %s", table_id, path)
            results.append(
                TableLoadResult(table_name, language, LoadStatus.NOT_FOUND, path=path, error=e)
            )
            continue
        except _LOAD_ERRORS as e:
            logger.warning("Unable to load string table %s from file %s: %s", table_id, path, e)
            results.append(
                TableLoadResult(table_name, language, LoadStatus.ERROR, path=path, error=e)
            )
            continue

        for key, value in entries.items():
            if logger.isEnabledFor(logging.DEBUG) and key in translations:
                logger.debug('     * replacing "%s"  ==> "%s"', key, value)
            translations[key] = value
        results.append(
            TableLoadResult(
                table_name, language, LoadStatus.SUCCESS, path=path, key_count=len(entries)
            )
        )

    return MergeResult(language=language, translations=translations, results=tuple(results))
