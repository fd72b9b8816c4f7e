"""Localization package for LocalizationProvider.

Provides the full localization stack: type aliases, configuration,
resource reading, table scanning and merging, language resolution,
settings persistence, change notification, and the provider itself.

Submodules:
    types          - PEP 695 type aliases (LanguageCode, TranslationKey, ...)
    configuration  - ResourceBundle, LocalizationTable, LocalizationConfiguration
    strings_format - .strings / property-list reader
    loading        - StringsLoader protocol, scan_table, merge_tables, results
    languages      - build_supported_set, build_available_list, resolve_language
    settings       - SettingsStore protocol, memory and JSON file stores
    notifications  - ChangeNotifier and Subscription
    provider       - LocalizationProvider (orchestration)
    helper         - LocalizationHelper and the Localizable protocol

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from l10nprovider.enums import LoadStatus
from l10nprovider.localization.configuration import (
    LocalizationConfiguration,
    LocalizationTable,
    ResourceBundle,
)
from l10nprovider.localization.helper import Localizable, LocalizationHelper
from l10nprovider.localization.languages import (
    build_available_list,
    build_supported_set,
    resolve_language,
    try_map_language,
)
from l10nprovider.localization.loading import (
    MergeResult,
    StringsFileLoader,
    StringsLoader,
    TableLoadResult,
    merge_tables,
    scan_table,
    scan_tables,
)
from l10nprovider.localization.notifications import (
    ChangeNotifier,
    Subscription,
    immediate_dispatcher,
)
from l10nprovider.localization.provider import LocalizationProvider, ProviderState
from l10nprovider.localization.settings import (
    JsonFileSettingsStore,
    MemorySettingsStore,
    SettingsStore,
)
from l10nprovider.localization.strings_format import parse_strings, parse_strings_data
from l10nprovider.localization.types import LanguageCode, ScanResult, StringTable, TranslationKey

__all__ = [
    # Provider
    "LocalizationProvider",
    "ProviderState",
    # Configuration
    "LocalizationConfiguration",
    "LocalizationTable",
    "ResourceBundle",
    # Loading
    "StringsLoader",
    "StringsFileLoader",
    "scan_table",
    "scan_tables",
    "merge_tables",
    "LoadStatus",
    "TableLoadResult",
    "MergeResult",
    "parse_strings",
    "parse_strings_data",
    # Language resolution
    "build_supported_set",
    "build_available_list",
    "resolve_language",
    "try_map_language",
    # Settings
    "SettingsStore",
    "MemorySettingsStore",
    "JsonFileSettingsStore",
    # Notifications
    "ChangeNotifier",
    "Subscription",
    "immediate_dispatcher",
    # Helper
    "Localizable",
    "LocalizationHelper",
    # Type aliases
    "LanguageCode",
    "ScanResult",
    "StringTable",
    "TranslationKey",
]
