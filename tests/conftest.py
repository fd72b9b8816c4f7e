"""Pytest configuration for the l10nprovider test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz

Fixtures:
    bundle_factory - Builds <lang>.lproj/<table>.strings trees under tmp_path
    settings - Empty MemorySettingsStore
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeAlias

import pytest
from hypothesis import Phase, Verbosity, settings as hypothesis_settings

from l10nprovider.localization import MemorySettingsStore, ResourceBundle
from tests.strategies.localization import render_strings

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

hypothesis_settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

hypothesis_settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

hypothesis_settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


hypothesis_settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested with -m fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# BUNDLE FIXTURES
# =============================================================================

BundleSpec: TypeAlias = Mapping[str, Mapping[str, Mapping[str, str]]]
"""{language: {table_name: {key: value}}}"""

BundleFactory: TypeAlias = Callable[..., ResourceBundle]


def write_bundle(root: Path, spec: BundleSpec) -> None:
    """Write <root>/<language>.lproj/<table>.strings for every entry of spec."""
    for language, tables in spec.items():
        lproj = root / f"{language}.lproj"
        lproj.mkdir(parents=True, exist_ok=True)
        for table_name, entries in tables.items():
            (lproj / f"{table_name}.strings").write_text(
                render_strings(entries), encoding="utf-8"
            )


@pytest.fixture
def bundle_factory(tmp_path: Path) -> BundleFactory:
    """Return a factory creating bundles in fresh subdirectories of tmp_path.

    Example:
        >>> bundle = bundle_factory({"en": {"Localizable": {"k": "v"}}})
    """
    counter = 0

    def factory(
        spec: BundleSpec,
        *,
        development_region: str | None = None,
        identifier: str | None = None,
    ) -> ResourceBundle:
        nonlocal counter
        counter += 1
        root = tmp_path / f"bundle{counter}"
        root.mkdir()
        write_bundle(root, spec)
        return ResourceBundle(
            root, identifier=identifier, development_region=development_region
        )

    return factory


@pytest.fixture
def settings() -> MemorySettingsStore:
    """Settings store with no system languages."""
    return MemorySettingsStore()
