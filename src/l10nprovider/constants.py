"""Shared constants for l10nprovider.

Single source of truth for the reserved identifiers and default values
used by the scanner, the resolver, and the configuration layer.

Constants are grouped by domain:
- Fallbacks: Values returned when resolution has nothing to work with
- Bundle layout: On-disk naming conventions for localized resources
- Configuration defaults: Initial values for LocalizationConfiguration

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Fallbacks
    "FALLBACK_LANGUAGE",
    "TABLE_INFO_KEY",
    # Bundle layout
    "LOCALE_DIR_SUFFIX",
    "BASE_LOCALE_DIR",
    "STRINGS_EXTENSION",
    "DEFAULT_TABLE_NAME",
    # Configuration defaults
    "DEFAULT_LANGUAGE",
    "DEFAULT_MISSING_PREFIX",
    "DEFAULT_SETTINGS_KEY",
    "DEFAULT_SYSTEM_LANGUAGES_KEY",
    "DEFAULT_LANGUAGE_NAME_PREFIX",
    # Notifications
    "DID_CHANGE_LANGUAGE",
]

# ============================================================================
# FALLBACKS
# ============================================================================

FALLBACK_LANGUAGE: str = "en"
"""Language reported when nothing can be resolved (empty configuration)."""

TABLE_INFO_KEY: str = "###"
"""Reserved scan-result key carrying the table name.

Never a valid language code, so it cannot collide with a locale directory.
Excluded from language intersection and never presented as a language.
"""

# ============================================================================
# BUNDLE LAYOUT
# ============================================================================

LOCALE_DIR_SUFFIX: str = ".lproj"
BASE_LOCALE_DIR: str = "Base"
STRINGS_EXTENSION: str = ".strings"
DEFAULT_TABLE_NAME: str = "Localizable"

# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================

DEFAULT_LANGUAGE: str = "en"
DEFAULT_MISSING_PREFIX: str = "### "
DEFAULT_SETTINGS_KEY: str = "L10nProvider.UserLanguage"
DEFAULT_SYSTEM_LANGUAGES_KEY: str = "L10nProvider.SystemLanguages"
DEFAULT_LANGUAGE_NAME_PREFIX: str = "language."

# ============================================================================
# NOTIFICATIONS
# ============================================================================

DID_CHANGE_LANGUAGE: str = "LocalizationProvider_didChangeLanguage"
"""Channel identifier for the language-change broadcast."""
