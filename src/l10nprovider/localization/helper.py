"""Keeps a UI object's strings in sync with the provider's language.

Attach a Localizable target to a LocalizationHelper: its strings are
applied immediately, then again after every language change. The helper
holds the target strongly and its subscription explicitly; detach() (or
leaving the ``with`` block) ends both.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import threading
from types import TracebackType
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from l10nprovider.localization.notifications import Subscription
    from l10nprovider.localization.provider import LocalizationProvider

__all__ = ["Localizable", "LocalizationHelper"]


class Localizable(Protocol):
    """Object that renders localized strings."""

    def did_change_language(self) -> None:
        """Called after the language changed, before update_localized_strings()."""
        ...

    def update_localized_strings(self) -> None:
        """Apply localized strings; called on attach and after each change."""
        ...


class LocalizationHelper:
    """Drives a Localizable target from provider notifications.

    Example:
        >>> helper = LocalizationHelper(provider)
        >>> helper.attach(view)          # view.update_localized_strings() runs now
        >>> provider.change("cs")        # ...and again after the change
        >>> helper.detach()
    """

    __slots__ = ("_lock", "_provider", "_subscription", "_target")

    def __init__(self, provider: LocalizationProvider) -> None:
        self._provider = provider
        self._lock = threading.Lock()
        self._target: Localizable | None = None
        self._subscription: Subscription | None = None

    @property
    def target(self) -> Localizable | None:
        """Currently attached target."""
        with self._lock:
            return self._target

    def attach(self, target: Localizable) -> None:
        """Attach target (replacing any previous one) and update it immediately."""
        with self._lock:
            self._target = target
            if self._subscription is None:
                self._subscription = self._provider.subscribe(self._on_change)
        target.update_localized_strings()

    def detach(self) -> None:
        """Forget the target and stop listening for changes."""
        with self._lock:
            subscription, self._subscription = self._subscription, None
            self._target = None
        if subscription is not None:
            subscription.cancel()

    def _on_change(self) -> None:
        with self._lock:
            target = self._target
        if target is not None:
            target.did_change_language()
            target.update_localized_strings()

    def __enter__(self) -> LocalizationHelper:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.detach()
