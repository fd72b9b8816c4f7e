"""Runtime-switchable localization provider.

LocalizationProvider loads the same .strings tables a platform would,
but can change language while the application runs. It layers four
steps, re-run on every configuration change:

    scan_tables -> build_supported_set / build_available_list
                -> resolve_language -> merge_tables -> commit -> notify

Key architectural decisions:
- One mutex guards one immutable ProviderState snapshot; mutations build
  a new snapshot and swap it in, so readers see all-old or all-new
- Failed merges never replace the live translations
- The change notification is posted after the lock is released, so
  listeners can call back into the provider
- No global singleton: the hosting application constructs and owns the
  provider and injects its collaborators (settings, loader, notifier)

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from l10nprovider.constants import FALLBACK_LANGUAGE
from l10nprovider.locale_utils import get_display_name
from l10nprovider.localization.configuration import LocalizationConfiguration, ResourceBundle
from l10nprovider.localization.languages import (
    build_available_list,
    build_supported_set,
    resolve_language,
)
from l10nprovider.localization.loading import (
    MergeResult,
    StringsFileLoader,
    StringsLoader,
    merge_tables,
    scan_tables,
)
from l10nprovider.localization.notifications import ChangeListener, ChangeNotifier, Subscription
from l10nprovider.localization.settings import MemorySettingsStore, SettingsStore
from l10nprovider.localization.types import LanguageCode, ScanResult, TranslationKey

__all__ = ["LocalizationProvider", "ProviderState"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProviderState:
    """Immutable snapshot of everything LocalizationProvider serves.

    Attributes:
        configuration: Configuration the snapshot was built from
        scans: Scan result per configured table, in configuration order
        supported_languages: Languages offered by every table
        available_languages: supported_languages in presentation order
        requested_language: Last explicit language request (None = automatic)
        applied_language: Effective language of ``translations``; None until
            the first successful merge
        translations: Merged key -> value table for applied_language
    """

    configuration: LocalizationConfiguration
    scans: tuple[ScanResult, ...] = ()
    supported_languages: frozenset[LanguageCode] = frozenset()
    available_languages: tuple[LanguageCode, ...] = ()
    requested_language: LanguageCode | None = None
    applied_language: LanguageCode | None = None
    translations: Mapping[TranslationKey, str] = field(
        default_factory=lambda: MappingProxyType({})
    )


class LocalizationProvider:
    """String localization with runtime language switching.

    Example:
        >>> bundle = ResourceBundle("resources", development_region="en")
        >>> config = LocalizationConfiguration.for_bundle(bundle, default_language="en")
        >>> provider = LocalizationProvider(config, main_bundle=bundle)
        >>> provider.localized_string("greeting")
        'Hello'
        >>> provider.change("cs")
        >>> provider.localized_string("greeting")
        'Ahoj'
        >>> provider.localized_string("no.such.key")
        '### no.such.key'

    Thread Safety:
        All public methods are thread-safe. File reads happen inside the
        lock; offload apply()/change() to a worker if they must not block.
    """

    __slots__ = (
        "_development_region",
        "_language_names",
        "_last_merge",
        "_loader",
        "_lock",
        "_notifier",
        "_settings",
        "_state",
    )

    def __init__(
        self,
        configuration: LocalizationConfiguration | None = None,
        *,
        settings: SettingsStore | None = None,
        loader: StringsLoader | None = None,
        notifier: ChangeNotifier | None = None,
        main_bundle: ResourceBundle | None = None,
    ) -> None:
        """Initialize provider and apply the initial configuration.

        Args:
            configuration: Initial configuration (default: LocalizationConfiguration())
            settings: Persistent settings. Defaults to a MemorySettingsStore
                seeded with the environment's system languages.
            loader: Resource reader (default: StringsFileLoader)
            notifier: Change broadcast (default: ChangeNotifier with its own
                worker thread)
            main_bundle: Application's main bundle; its development_region is
                a late resolution fallback
        """
        config = configuration if configuration is not None else LocalizationConfiguration()
        self._settings: SettingsStore = (
            settings
            if settings is not None
            else MemorySettingsStore.with_system_languages(key=config.system_languages_key)
        )
        self._loader: StringsLoader = loader if loader is not None else StringsFileLoader()
        self._notifier = notifier if notifier is not None else ChangeNotifier()
        self._development_region = main_bundle.development_region if main_bundle else None

        self._lock = threading.Lock()
        self._state = ProviderState(configuration=config)
        self._language_names: dict[LanguageCode, str] = {}
        self._last_merge: MergeResult | None = None

        with self._lock:
            fire = self._apply_configuration(config)
        if fire:
            self._report_change()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        state = self.state
        return (
            f"LocalizationProvider(language={state.applied_language!r}, "
            f"available={list(state.available_languages)!r})"
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> ProviderState:
        """Current immutable state snapshot."""
        with self._lock:
            return self._state

    @property
    def language(self) -> LanguageCode | None:
        """Last explicitly requested language; None means automatic selection."""
        with self._lock:
            return self._state.requested_language

    @property
    def applied_language(self) -> LanguageCode:
        """Effective language. FALLBACK_LANGUAGE if nothing could be applied."""
        with self._lock:
            return self._state.applied_language or FALLBACK_LANGUAGE

    @property
    def available_languages(self) -> list[LanguageCode]:
        """Languages offered by every table, preferred languages first."""
        with self._lock:
            return list(self._state.available_languages)

    @property
    def supported_languages(self) -> frozenset[LanguageCode]:
        """Unordered set of languages offered by every table."""
        with self._lock:
            return self._state.supported_languages

    @property
    def available_language_names(self) -> list[tuple[LanguageCode, str]]:
        """(identifier, display name) pairs in available_languages order."""
        with self._lock:
            return [
                (language, self._translate_language(language))
                for language in self._state.available_languages
            ]

    @property
    def configuration(self) -> LocalizationConfiguration:
        """Configuration currently applied."""
        with self._lock:
            return self._state.configuration

    @property
    def notifier(self) -> ChangeNotifier:
        """Broadcast fired after each language change."""
        return self._notifier

    def get_last_merge_result(self) -> MergeResult | None:
        """Per-table outcome of the most recent merge attempt, for diagnostics.

        Reflects failed attempts too, even though those were not committed.
        """
        with self._lock:
            return self._last_merge

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def localized_string(self, key: TranslationKey) -> str:
        """Return translation for key, or missing prefix + key when absent."""
        with self._lock:
            return self._translate(key)

    localized = localized_string

    def try_localized_string(self, key: TranslationKey) -> str | None:
        """Return translation for key, or None when absent."""
        with self._lock:
            return self._state.translations.get(key)

    def localized_format(self, key: TranslationKey, *args: object) -> str:
        """Translate key and substitute printf-style arguments.

        ``%@`` placeholders are treated as ``%s``. If the arguments don't
        fit the format, the unformatted translation is returned.

        Example:
            >>> provider.localized_format("welcome.user", "Anna")  # "Hi, %@!"
            'Hi, Anna!'
        """
        template = self.localized_string(key)
        if not args:
            return template
        try:
            return template.replace("%@", "%s") % args
        except (TypeError, ValueError) as e:
            logger.warning("Unable to format translation for '%s': %s", key, e)
            return template

    def language_name(self, language: LanguageCode) -> str:
        """Return display name for a language identifier.

        Lookup order: translated key ``<prefix_for_localized_language_names><id>``,
        then the locale's own name from CLDR, then a missing-translation marker.
        """
        with self._lock:
            return self._translate_language(language)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply(self, configuration: LocalizationConfiguration) -> None:
        """Apply a new configuration.

        May change the effective language if the new tables don't support
        the current one. Always notifies listeners.
        """
        with self._lock:
            fire = self._apply_configuration(configuration)
        if fire:
            self._report_change()

    def change(self, language: LanguageCode | None) -> None:
        """Change language. None returns to automatic selection.

        Listeners are notified only if the effective language changed. If the
        tables for the resolved language fail to load, nothing changes.
        """
        with self._lock:
            fire = self._apply_language(language)
        if fire:
            self._report_change()

    def subscribe(self, listener: ChangeListener) -> Subscription:
        """Subscribe to language changes; keep the handle, cancel() to stop."""
        return self._notifier.subscribe(listener)

    # ------------------------------------------------------------------
    # Internals (caller holds self._lock)
    # ------------------------------------------------------------------

    def _translate(self, key: TranslationKey) -> str:
        value = self._state.translations.get(key)
        if value is not None:
            return value
        # Highlight missing translation
        return self._state.configuration.missing_localization_prefix + key

    def _apply_configuration(self, config: LocalizationConfiguration) -> bool:
        """Rescan tables and re-resolve the language.

        Returns:
            Always True: a configuration change is treated as language-impacting
        """
        scans = tuple(scan_tables(config.string_tables, config.default_language))
        supported = build_supported_set(scans)
        available = tuple(build_available_list(supported, config.preferred_languages))

        self._state = replace(
            self._state,
            configuration=config,
            scans=scans,
            supported_languages=supported,
            available_languages=available,
        )
        self._language_names.clear()
        logger.info(
            "Applied localization configuration: %d table(s), languages %s",
            len(scans),
            list(available),
        )

        # Persisted choice first, then the in-memory one; both may be None
        seed = self._settings.get_string(config.settings_key) or self._state.requested_language
        self._apply_language(seed)
        return True

    def _apply_language(self, requested: LanguageCode | None) -> bool:
        """Resolve, merge and commit.

        Returns:
            True if the effective language changed and must be reported
        """
        state = self._state
        config = state.configuration
        effective = resolve_language(
            requested,
            state.supported_languages,
            mappings=config.language_mappings,
            system_languages=self._settings.get_string_list(config.system_languages_key),
            default_language=config.default_language,
            development_region=self._development_region,
            available=state.available_languages,
        )

        merge = merge_tables(state.scans, effective, self._loader)
        self._last_merge = merge
        if not merge.success:
            logger.warning(
                "The language was not changed to '%s', due to loading error: %s",
                effective,
                ", ".join(f"{r.table_name} ({r.status})" for r in merge.get_failures()),
            )
            return False

        changed = state.applied_language != effective
        self._state = replace(
            state,
            requested_language=requested,
            applied_language=effective,
            translations=MappingProxyType(merge.translations),
        )
        if changed:
            # Names may come from the translations being replaced
            self._language_names.clear()
            logger.info("Language changed to '%s' (requested: %s)", effective, requested)

        if requested is not None:
            self._settings.set_value(config.settings_key, effective)
        else:
            self._settings.remove(config.settings_key)
        self._settings.set_value(config.system_languages_key, [effective])
        self._settings.synchronize()
        return changed

    def _translate_language(self, language: LanguageCode) -> str:
        name = self._language_names.get(language)
        if name is None:
            name = self._fetch_language_name(language)
            self._language_names[language] = name
        return name

    def _fetch_language_name(self, language: LanguageCode) -> str:
        config = self._state.configuration
        key = config.prefix_for_localized_language_names + language
        name = self._state.translations.get(key)
        if name is not None:
            return name
        name = get_display_name(language)
        if name is not None:
            return name
        return config.missing_localization_prefix + key

    def _report_change(self) -> None:
        """Post the change notification; never called with the lock held."""
        self._notifier.post()
