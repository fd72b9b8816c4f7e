"""Hypothesis strategies for l10nprovider property-based testing.

Strategies are organized by domain:

- localization: language codes, scan results, string tables, .strings rendering

Usage:
    from tests.strategies import language_codes, scan_results
    from tests.strategies.localization import string_tables, render_strings

Event-Emitting Strategies:
    - scan_result_sets: Emits scan_overlap=full|partial|disjoint
    - string_tables: Emits table_size=empty|small|large
"""

from .localization import (
    language_codes,
    preferred_orders,
    render_strings,
    scan_result_sets,
    scan_results,
    string_tables,
    translation_keys,
    translation_values,
)

__all__ = [
    "language_codes",
    "preferred_orders",
    "render_strings",
    "scan_result_sets",
    "scan_results",
    "string_tables",
    "translation_keys",
    "translation_values",
]
