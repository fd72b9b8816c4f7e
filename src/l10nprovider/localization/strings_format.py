"""Reader for .strings translation resources.

A .strings file is an old-style (ASCII) property list holding a flat
dictionary of string keys to string values:

    /* Greeting on the home screen */
    "greeting" = "Hello";
    "farewell" = "Goodbye, %@!";
    // line comments are accepted too
    unquoted_key = "Value";

XML and binary property lists are also accepted; they are delegated to
``plistlib``. Non-string entries in such documents are skipped.

Encoding detection follows the BOM (UTF-8, UTF-16 LE/BE); files without a
BOM are decoded as UTF-8.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import codecs
import plistlib
from typing import NoReturn
from xml.parsers.expat import ErrorString, ExpatError

from l10nprovider.errors import StringsSyntaxError
from l10nprovider.localization.types import StringTable

__all__ = [
    "decode_strings_data",
    "parse_strings",
    "parse_strings_data",
]

# Characters allowed in unquoted old-style plist strings
_UNQUOTED_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_$+/:.-"
)

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "'": "'",
    "\\": "\\",
}

_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def decode_strings_data(data: bytes) -> str:
    """Decode raw resource bytes to text using BOM detection.

    Raises:
        UnicodeDecodeError: If the content is not valid in the detected encoding
    """
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return data.decode(encoding)
    return data.decode("utf-8")


def parse_strings_data(data: bytes, source_path: str | None = None) -> StringTable:
    """Parse raw resource bytes in any supported property-list flavour.

    Args:
        data: File content
        source_path: Path used in error messages

    Returns:
        Flat key -> value dictionary

    Raises:
        StringsSyntaxError: If old-style syntax is malformed, an XML plist is
            not well-formed, or the document root is not a dictionary
        plistlib.InvalidFileException: If an XML/binary plist is corrupt
        UnicodeDecodeError: If text content cannot be decoded
    """
    head = data.lstrip()
    if data.startswith(b"bplist"):
        root = plistlib.loads(data)
    elif head.startswith((b"<?xml", b"<plist")):
        try:
            root = plistlib.loads(head)
        except ExpatError as e:
            raise StringsSyntaxError(
                f"Malformed XML property list: {ErrorString(e.code)}",
                line=e.lineno,
                column=e.offset + 1,
                source_path=source_path,
            ) from e
    else:
        return parse_strings(decode_strings_data(data), source_path=source_path)
    if not isinstance(root, dict):
        msg = f"Property list root must be a dictionary, got {type(root).__name__}"
        raise StringsSyntaxError(msg, source_path=source_path)
    return {
        key: value
        for key, value in root.items()
        if isinstance(key, str) and isinstance(value, str)
    }


def parse_strings(source: str, source_path: str | None = None) -> StringTable:
    """Parse old-style .strings source text.

    Later duplicates of a key replace earlier ones.

    Example:
        >>> parse_strings('"a" = "1";\\n"b" = "2";')
        {'a': '1', 'b': '2'}

    Raises:
        StringsSyntaxError: On malformed input
    """
    return _StringsParser(source, source_path).parse()


class _StringsParser:
    """Recursive-descent parser over a flat dictionary body."""

    __slots__ = ("_pos", "_source", "_source_path")

    def __init__(self, source: str, source_path: str | None) -> None:
        self._source = source
        self._source_path = source_path
        self._pos = 0

    def parse(self) -> StringTable:
        table: StringTable = {}
        self._skip_trivia()
        # An explicit { ... } wrapper is optional
        braced = self._peek() == "{"
        if braced:
            self._pos += 1

        while True:
            self._skip_trivia()
            char = self._peek()
            if char is None:
                if braced:
                    self._fail("Missing closing '}'")
                break
            if char == "}" and braced:
                self._pos += 1
                self._skip_trivia()
                if self._peek() is not None:
                    self._fail("Unexpected content after closing '}'")
                break

            key = self._parse_string()
            self._skip_trivia()
            if self._peek() == "=":
                self._pos += 1
                self._skip_trivia()
                value = self._parse_string()
                self._skip_trivia()
            else:
                # Bare key: value defaults to the key itself
                value = key
            self._expect(";")
            table[key] = value
        return table

    # ------------------------------------------------------------------
    # Lexing helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str | None:
        index = self._pos + offset
        if index < len(self._source):
            return self._source[index]
        return None

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            found = self._peek()
            self._fail(f"Expected '{char}', found {'end of file' if found is None else repr(found)}")
        self._pos += 1

    def _skip_trivia(self) -> None:
        """Skip whitespace and comments."""
        source = self._source
        while self._pos < len(source):
            char = source[self._pos]
            if char.isspace() or char == "\ufeff":
                self._pos += 1
            elif source.startswith("//", self._pos):
                end = source.find("\n", self._pos)
                self._pos = len(source) if end == -1 else end + 1
            elif source.startswith("/*", self._pos):
                end = source.find("*/", self._pos + 2)
                if end == -1:
                    self._fail("Unterminated comment")
                self._pos = end + 2
            else:
                return

    def _parse_string(self) -> str:
        char = self._peek()
        if char == '"':
            return self._parse_quoted()
        if char is not None and char in _UNQUOTED_CHARS:
            start = self._pos
            while (c := self._peek()) is not None and c in _UNQUOTED_CHARS:
                self._pos += 1
            return self._source[start : self._pos]
        self._fail(f"Expected string, found {'end of file' if char is None else repr(char)}")

    def _parse_quoted(self) -> str:
        self._pos += 1  # opening quote
        parts: list[str] = []
        source = self._source
        while True:
            if self._pos >= len(source):
                self._fail("Unterminated string")
            char = source[self._pos]
            if char == '"':
                self._pos += 1
                return "".join(parts)
            if char == "\\":
                parts.append(self._parse_escape())
            else:
                parts.append(char)
                self._pos += 1

    def _parse_escape(self) -> str:
        self._pos += 1  # backslash
        char = self._peek()
        if char is None:
            self._fail("Unterminated escape sequence")
        if char in _SIMPLE_ESCAPES:
            self._pos += 1
            return _SIMPLE_ESCAPES[char]
        if char in "uU":
            digits = self._source[self._pos + 1 : self._pos + 5]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                self._fail("Invalid unicode escape, expected 4 hex digits")
            self._pos += 5
            return chr(int(digits, 16))
        if char in "01234567":
            start = self._pos
            while self._pos - start < 3 and (c := self._peek()) is not None and c in "01234567":
                self._pos += 1
            return chr(int(self._source[start : self._pos], 8))
        # Unknown escapes keep the escaped character
        self._pos += 1
        return char

    def _fail(self, message: str) -> NoReturn:
        consumed = self._source[: self._pos]
        line = consumed.count("\n") + 1
        column = self._pos - (consumed.rfind("\n") + 1) + 1
        raise StringsSyntaxError(
            message, line=line, column=column, source_path=self._source_path
        )
