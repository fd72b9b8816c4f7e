"""Persistent key-value settings used by LocalizationProvider.

The provider stores two values:
- the last explicitly requested language (one string under
  ``LocalizationConfiguration.settings_key``)
- the ordered platform language list (under
  ``LocalizationConfiguration.system_languages_key``), which a successful
  resolution overwrites with the single winning language

Components:
    SettingsStore - Protocol implemented by all stores
    MemorySettingsStore - Process-local dictionary store
    JsonFileSettingsStore - JSON document on disk

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol, TypeAlias

from l10nprovider.constants import DEFAULT_SYSTEM_LANGUAGES_KEY
from l10nprovider.locale_utils import get_system_languages

__all__ = [
    "JsonFileSettingsStore",
    "MemorySettingsStore",
    "SettingsStore",
    "SettingsValue",
]

logger = logging.getLogger(__name__)

SettingsValue: TypeAlias = str | list[str]


class SettingsStore(Protocol):
    """Protocol for the provider's persistent settings."""

    def get_string(self, key: str) -> str | None:
        """Return the string stored under key, or None if absent or not a string."""
        ...

    def get_string_list(self, key: str) -> list[str] | None:
        """Return the string list stored under key, or None if absent or not a list."""
        ...

    def set_value(self, key: str, value: SettingsValue) -> None:
        """Store a string or list of strings under key."""
        ...

    def remove(self, key: str) -> None:
        """Remove key; no-op if absent."""
        ...

    def synchronize(self) -> None:
        """Flush pending changes to durable storage."""
        ...


def _as_string(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _as_string_list(value: object) -> list[str] | None:
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    return None


class MemorySettingsStore:
    """Thread-safe in-memory settings.

    Example:
        >>> store = MemorySettingsStore.with_system_languages(["cs", "en"])
        >>> store.get_string_list("L10nProvider.SystemLanguages")
        ['cs', 'en']
    """

    __slots__ = ("_lock", "_values")

    def __init__(self, initial: Mapping[str, SettingsValue] | None = None) -> None:
        """Initialize store with optional initial values (copied)."""
        self._lock = threading.Lock()
        self._values: dict[str, SettingsValue] = {}
        for key, value in (initial or {}).items():
            self._values[key] = list(value) if isinstance(value, list) else value

    @classmethod
    def with_system_languages(
        cls,
        languages: Iterable[str] | None = None,
        key: str = DEFAULT_SYSTEM_LANGUAGES_KEY,
    ) -> MemorySettingsStore:
        """Create a store seeded with the platform language list.

        Args:
            languages: Ordered languages; detected from the environment when None
            key: Settings key for the list
        """
        seeded = list(languages) if languages is not None else get_system_languages()
        return cls({key: seeded})

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        with self._lock:
            return f"MemorySettingsStore(keys={sorted(self._values)})"

    def get_string(self, key: str) -> str | None:
        with self._lock:
            return _as_string(self._values.get(key))

    def get_string_list(self, key: str) -> list[str] | None:
        with self._lock:
            return _as_string_list(self._values.get(key))

    def set_value(self, key: str, value: SettingsValue) -> None:
        with self._lock:
            self._values[key] = list(value) if isinstance(value, list) else value

    def remove(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)

    def synchronize(self) -> None:
        """No-op: memory store has no durable backing."""

    def snapshot(self) -> dict[str, SettingsValue]:
        """Return a copy of all stored values."""
        with self._lock:
            return {
                key: list(value) if isinstance(value, list) else value
                for key, value in self._values.items()
            }


class JsonFileSettingsStore:
    """Settings persisted as a JSON object in a file.

    The file is read lazily on first access. Changes are kept in memory
    until synchronize() writes the whole document (via a temporary file
    and atomic rename). A missing file starts empty; an unreadable or
    malformed file is logged and also starts empty.

    Attributes:
        path: Location of the JSON document
    """

    __slots__ = ("_dirty", "_lock", "_values", "path")

    def __init__(self, path: str | Path) -> None:
        """Initialize store for the given file path."""
        self.path = Path(path)
        self._lock = threading.Lock()
        self._values: dict[str, SettingsValue] | None = None
        self._dirty = False

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"JsonFileSettingsStore(path={str(self.path)!r})"

    def _load(self) -> dict[str, SettingsValue]:
        """Return the in-memory document, reading the file on first use.

        Caller must hold the lock.
        """
        if self._values is not None:
            return self._values
        values: dict[str, SettingsValue] = {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            document = {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            document = {}
        if isinstance(document, dict):
            for key, value in document.items():
                if _as_string(value) is not None or _as_string_list(value) is not None:
                    values[key] = value
        else:
            logger.warning("Ignoring settings file %s: root is not an object", self.path)
        self._values = values
        return values

    def get_string(self, key: str) -> str | None:
        with self._lock:
            return _as_string(self._load().get(key))

    def get_string_list(self, key: str) -> list[str] | None:
        with self._lock:
            return _as_string_list(self._load().get(key))

    def set_value(self, key: str, value: SettingsValue) -> None:
        with self._lock:
            self._load()[key] = list(value) if isinstance(value, list) else value
            self._dirty = True

    def remove(self, key: str) -> None:
        with self._lock:
            if self._load().pop(key, None) is not None:
                self._dirty = True

    def synchronize(self) -> None:
        """Write pending changes to disk.

        Write failures are logged; values stay in memory and are retried on
        the next synchronize().
        """
        with self._lock:
            if not self._dirty:
                return
            document = json.dumps(self._load(), ensure_ascii=False, indent=2, sort_keys=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path.write_text(document, encoding="utf-8")
                tmp_path.replace(self.path)
            except OSError as e:
                logger.warning("Unable to write settings file %s: %s", self.path, e)
                return
            self._dirty = False
