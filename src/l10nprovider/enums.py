"""Enumerations for l10nprovider type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of loading one string table for one language.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Table loaded and merged."""

    NOT_FOUND = "not_found"
    """Table has no resource for the requested language."""

    ERROR = "error"
    """Resource exists but could not be read or parsed."""


__all__ = [
    "LoadStatus",
]
