"""l10nprovider - runtime-switchable string-table localization.

Loads per-language .strings tables from resource bundles, computes the
languages every table supports, resolves an effective language through a
fallback chain (explicit choice, system language, mappings, default,
development region), and serves merged translations. The language can be
changed while the application runs; listeners are notified afterwards.

Public API:
    LocalizationProvider - Thread-safe provider with runtime language switching
    LocalizationConfiguration - Tables, default language, mappings, prefixes
    LocalizationTable - One named string table in a bundle
    ResourceBundle - Directory containing <language>.lproj subdirectories
    LocalizationHelper - Re-applies a target's strings after language changes

Exceptions:
    LocalizationError - Base exception class
    ConfigurationError - Invalid configuration values
    StringsSyntaxError - Malformed .strings resource

Submodules:
    l10nprovider.localization - Scanner, resolver, merger, settings, notifications
    l10nprovider.locale_utils - Locale normalization, system languages, display names
"""

from .errors import ConfigurationError, LocalizationError, StringsSyntaxError
from .localization import (
    LocalizationConfiguration,
    LocalizationHelper,
    LocalizationProvider,
    LocalizationTable,
    ResourceBundle,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("l10nprovider")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "LocalizationConfiguration",
    "LocalizationError",
    "LocalizationHelper",
    "LocalizationProvider",
    "LocalizationTable",
    "ResourceBundle",
    "StringsSyntaxError",
    "__version__",
]
