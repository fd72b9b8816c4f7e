"""Tests for LocalizationHelper.

Python 3.13+.
"""

from __future__ import annotations

import pytest

from l10nprovider.localization import (
    ChangeNotifier,
    LocalizationConfiguration,
    LocalizationHelper,
    LocalizationProvider,
    MemorySettingsStore,
    immediate_dispatcher,
)
from tests.conftest import BundleFactory


class FakeView:
    """Localizable target recording callbacks."""

    def __init__(self, provider: LocalizationProvider) -> None:
        self.provider = provider
        self.events: list[str] = []
        self.title = ""

    def did_change_language(self) -> None:
        self.events.append("did_change")

    def update_localized_strings(self) -> None:
        self.events.append("update")
        self.title = self.provider.localized_string("title")


@pytest.fixture
def provider(bundle_factory: BundleFactory) -> LocalizationProvider:
    bundle = bundle_factory({
        "en": {"Localizable": {"title": "Settings"}},
        "cs": {"Localizable": {"title": "Nastavení"}},
    })
    return LocalizationProvider(
        LocalizationConfiguration.for_bundle(bundle),
        settings=MemorySettingsStore(),
        notifier=ChangeNotifier(dispatcher=immediate_dispatcher),
    )


class TestLocalizationHelper:
    """attach / detach behaviour."""

    def test_attach_updates_immediately(self, provider: LocalizationProvider) -> None:
        """attach() applies strings right away."""
        view = FakeView(provider)
        helper = LocalizationHelper(provider)
        helper.attach(view)
        assert view.events == ["update"]
        assert view.title == "Settings"
        assert helper.target is view

    def test_language_change_refreshes_target(self, provider: LocalizationProvider) -> None:
        """A change calls did_change_language then update_localized_strings."""
        view = FakeView(provider)
        helper = LocalizationHelper(provider)
        helper.attach(view)
        provider.change("cs")
        assert view.events == ["update", "did_change", "update"]
        assert view.title == "Nastavení"

    def test_detach_stops_updates(self, provider: LocalizationProvider) -> None:
        """After detach() the target is no longer called."""
        view = FakeView(provider)
        helper = LocalizationHelper(provider)
        helper.attach(view)
        helper.detach()
        provider.change("cs")
        assert view.events == ["update"]
        assert helper.target is None
        assert provider.notifier.subscriber_count == 0

    def test_reattach_replaces_target(self, provider: LocalizationProvider) -> None:
        """Only the latest target is driven; one subscription is kept."""
        first, second = FakeView(provider), FakeView(provider)
        helper = LocalizationHelper(provider)
        helper.attach(first)
        helper.attach(second)
        provider.change("cs")
        assert first.events == ["update"]
        assert second.events == ["update", "did_change", "update"]
        assert provider.notifier.subscriber_count == 1

    def test_context_manager(self, provider: LocalizationProvider) -> None:
        """Leaving the with block detaches."""
        view = FakeView(provider)
        with LocalizationHelper(provider) as helper:
            helper.attach(view)
        provider.change("cs")
        assert view.events == ["update"]
