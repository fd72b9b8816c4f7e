"""Declarative configuration for LocalizationProvider.

Three frozen dataclasses describe where string tables live and how the
provider resolves languages:

    ResourceBundle - Directory containing <language>.lproj subdirectories
    LocalizationTable - One named string table inside a bundle
    LocalizationConfiguration - Tables plus resolution and formatting options

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from l10nprovider.constants import (
    DEFAULT_LANGUAGE,
    DEFAULT_LANGUAGE_NAME_PREFIX,
    DEFAULT_MISSING_PREFIX,
    DEFAULT_SETTINGS_KEY,
    DEFAULT_SYSTEM_LANGUAGES_KEY,
    DEFAULT_TABLE_NAME,
)
from l10nprovider.errors import ConfigurationError

__all__ = [
    "LocalizationConfiguration",
    "LocalizationTable",
    "ResourceBundle",
]


@dataclass(frozen=True, slots=True)
class ResourceBundle:
    """Handle to a directory of localized resources.

    Attributes:
        path: Bundle root; locale variants live in ``<path>/<lang>.lproj``
        identifier: Optional human-readable bundle identifier for diagnostics
        development_region: Language the bundle was authored in, used as a
            late resolution fallback when this is the provider's main bundle
    """

    path: Path
    identifier: str | None = None
    development_region: str | None = None

    def __post_init__(self) -> None:
        """Coerce path-like values to Path."""
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def main(cls) -> ResourceBundle:
        """Return a bundle rooted at the current working directory."""
        return cls(Path.cwd())

    def describe(self) -> str:
        """Return identifier if set, otherwise the bundle path."""
        return self.identifier or str(self.path)


@dataclass(frozen=True, slots=True)
class LocalizationTable:
    """One string table (for any language) stored in one bundle.

    Attributes:
        name: File name without the ".strings" extension (e.g., "Localizable")
        bundle: Bundle containing the table's .lproj directories
    """

    name: str
    bundle: ResourceBundle = field(default_factory=ResourceBundle.main)

    def __post_init__(self) -> None:
        """Validate table name.

        Raises:
            ConfigurationError: If name is empty or contains path separators
        """
        if not self.name:
            msg = "Table name cannot be empty"
            raise ConfigurationError(msg)
        if "/" in self.name or "\\" in self.name or ".." in self.name:
            msg = f"Table name must be a plain file name, got: '{self.name}'"
            raise ConfigurationError(msg)

    @classmethod
    def default_table(cls) -> LocalizationTable:
        """Return the "Localizable" table in the main bundle."""
        return cls(DEFAULT_TABLE_NAME)


def _default_tables() -> tuple[LocalizationTable, ...]:
    return (LocalizationTable.default_table(),)


@dataclass(frozen=True, slots=True)
class LocalizationConfiguration:
    """Immutable runtime parameters for LocalizationProvider.

    When no language has been chosen explicitly, the provider resolves one
    in this order:

        1. system language, if supported by all string tables
        2. system language mapped through ``language_mappings``
        3. ``default_language`` (directly or mapped)
        4. the main bundle's development region (directly or mapped)
        5. the first entry of the available languages list

    If a bundle uses "Base" localization, set ``default_language`` to the
    identifier the Base directory represents.

    Attributes:
        default_language: Identifier standing in for "Base" and used when the
            system language is not supported
        string_tables: Tables merged on every language change. Later tables
            override keys defined by earlier ones.
        language_mappings: Steers unsupported identifiers onto supported
            ones, e.g. ``{"sk": "cs"}`` shows Czech to Slovak users
        preferred_languages: Identifiers moved to the front of
            ``available_languages``, in this order
        missing_localization_prefix: Prepended to keys without translation,
            so "greeting" renders as "### greeting"
        settings_key: Settings key remembering the explicit language choice
        system_languages_key: Settings key holding the ordered platform
            language list
        prefix_for_localized_language_names: Key prefix for translated
            language names, e.g. "language.cs" = "Čeština"

    Example:
        >>> config = LocalizationConfiguration(
        ...     default_language="cs",
        ...     string_tables=[LocalizationTable("Localizable", ResourceBundle("res"))],
        ...     language_mappings={"sk": "cs"},
        ... )
        >>> config.with_changes(missing_localization_prefix="!! ").default_language
        'cs'
    """

    default_language: str = DEFAULT_LANGUAGE
    string_tables: tuple[LocalizationTable, ...] = field(default_factory=_default_tables)
    language_mappings: Mapping[str, str] | None = None
    preferred_languages: tuple[str, ...] | None = None
    missing_localization_prefix: str = DEFAULT_MISSING_PREFIX
    settings_key: str = DEFAULT_SETTINGS_KEY
    system_languages_key: str = DEFAULT_SYSTEM_LANGUAGES_KEY
    prefix_for_localized_language_names: str = DEFAULT_LANGUAGE_NAME_PREFIX

    def __post_init__(self) -> None:
        """Normalize collections and validate values.

        Raises:
            ConfigurationError: If default_language, settings_key or
                system_languages_key is empty, or a table entry has the
                wrong type
        """
        if not self.default_language:
            msg = "default_language cannot be empty"
            raise ConfigurationError(msg)
        if not self.settings_key:
            msg = "settings_key cannot be empty"
            raise ConfigurationError(msg)
        if not self.system_languages_key:
            msg = "system_languages_key cannot be empty"
            raise ConfigurationError(msg)

        tables = tuple(self.string_tables)
        for table in tables:
            if not isinstance(table, LocalizationTable):
                msg = f"string_tables entries must be LocalizationTable, got {type(table).__name__}"
                raise ConfigurationError(msg)
        object.__setattr__(self, "string_tables", tables)

        if self.language_mappings is not None:
            object.__setattr__(
                self, "language_mappings", MappingProxyType(dict(self.language_mappings))
            )
        if self.preferred_languages is not None:
            object.__setattr__(self, "preferred_languages", tuple(self.preferred_languages))

    def with_changes(self, **changes: Any) -> LocalizationConfiguration:
        """Return a copy with the given fields replaced.

        Raises:
            ConfigurationError: If the resulting configuration is invalid
            TypeError: If a field name is unknown
        """
        return dataclasses.replace(self, **changes)

    @classmethod
    def for_bundle(
        cls,
        bundle: ResourceBundle,
        table_names: Iterable[str] = (DEFAULT_TABLE_NAME,),
        **options: Any,
    ) -> LocalizationConfiguration:
        """Build a configuration whose tables all live in one bundle.

        Args:
            bundle: Bundle containing every table
            table_names: Table names in merge order
            **options: Any other LocalizationConfiguration field
        """
        tables = tuple(LocalizationTable(name, bundle) for name in table_names)
        return cls(string_tables=tables, **options)
