"""Exception hierarchy for l10nprovider.

The provider itself never raises from its public operations; these types
surface at the edges: configuration validation and the resource reader.
Reader errors are captured in load results rather than propagated.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "ConfigurationError",
    "LocalizationError",
    "StringsSyntaxError",
]


class LocalizationError(Exception):
    """Base exception for all l10nprovider errors."""


class ConfigurationError(LocalizationError, ValueError):
    """Invalid LocalizationConfiguration value.

    Subclasses ValueError so callers validating user input can catch the
    standard type.
    """


class StringsSyntaxError(LocalizationError):
    """Malformed .strings resource.

    Attributes:
        line: 1-based line of the offending character
        column: 1-based column of the offending character
        source_path: Path of the resource, when known
    """

    def __init__(
        self,
        message: str,
        *,
        line: int = 0,
        column: int = 0,
        source_path: str | None = None,
    ) -> None:
        """Initialize StringsSyntaxError.

        Args:
            message: Human-readable description of the problem
            line: 1-based line number (0 when unknown)
            column: 1-based column number (0 when unknown)
            source_path: Resource path for diagnostics
        """
        location = f"{source_path or '<string>'}:{line}:{column}"
        super().__init__(f"{location}: {message}")
        self.line = line
        self.column = column
        self.source_path = source_path
