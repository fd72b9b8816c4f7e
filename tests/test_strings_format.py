"""Tests for the .strings resource reader.

Covers old-style syntax (quoted/unquoted strings, comments, escapes,
bare keys, optional braces), BOM-based decoding, XML/binary property
lists via plistlib, and error positions.

Python 3.13+.
"""

from __future__ import annotations

import codecs
import plistlib

import pytest
from hypothesis import event, given

from l10nprovider.errors import StringsSyntaxError
from l10nprovider.localization.strings_format import (
    decode_strings_data,
    parse_strings,
    parse_strings_data,
)
from tests.strategies.localization import render_strings, string_tables


class TestParseStrings:
    """Old-style .strings syntax."""

    def test_simple_entries(self) -> None:
        """Quoted key/value pairs are read in order."""
        source = '"greeting" = "Hello";\n"farewell" = "Bye";\n'
        assert parse_strings(source) == {"greeting": "Hello", "farewell": "Bye"}

    def test_comments_are_ignored(self) -> None:
        """Block and line comments are skipped anywhere between tokens."""
        source = (
            "/* Header\n   spanning lines */\n"
            '"a" /* inline */ = "1"; // trailing\n'
            "// whole line\n"
            '"b" = "2";'
        )
        assert parse_strings(source) == {"a": "1", "b": "2"}

    def test_unquoted_tokens(self) -> None:
        """Unquoted keys and values use the plist unquoted character set."""
        assert parse_strings("key.name = value_1;") == {"key.name": "value_1"}

    def test_bare_key_maps_to_itself(self) -> None:
        """A key without '= value' uses the key as its value."""
        assert parse_strings('"OK";') == {"OK": "OK"}

    def test_escape_sequences(self) -> None:
        """Standard escapes, unicode and octal escapes are decoded."""
        source = r'"k" = "a\nb\t\"q\"\\ \U00e9 \101";'
        assert parse_strings(source) == {"k": 'a\nb\t"q"\\ é A'}

    def test_unknown_escape_keeps_character(self) -> None:
        """Unknown escapes keep the escaped character."""
        assert parse_strings(r'"k" = "\%";') == {"k": "%"}

    def test_later_duplicate_wins(self) -> None:
        """A duplicated key takes its last value."""
        assert parse_strings('"k" = "1"; "k" = "2";') == {"k": "2"}

    def test_braced_dictionary(self) -> None:
        """An explicit { ... } wrapper is accepted."""
        assert parse_strings('{ "k" = "v"; }') == {"k": "v"}

    def test_empty_source(self) -> None:
        """Empty or comment-only sources yield an empty table."""
        assert parse_strings("") == {}
        assert parse_strings("/* nothing */\n// here\n") == {}

    def test_cocoa_placeholders_untouched(self) -> None:
        """Format placeholders are literal text to the reader."""
        assert parse_strings('"w" = "Hi, %@!";') == {"w": "Hi, %@!"}


class TestParseStringsErrors:
    """Malformed sources raise StringsSyntaxError with a position."""

    @pytest.mark.parametrize(
        "source",
        [
            '"k" = "v"',
            '"k" = "v',
            '"k" = ;',
            '"k" "v";',
            "/* open",
            '{ "k" = "v";',
            '{ "k" = "v"; } extra',
            r'"k" = "\u12";',
        ],
    )
    def test_malformed_sources(self, source: str) -> None:
        """Each malformed source raises StringsSyntaxError."""
        with pytest.raises(StringsSyntaxError):
            parse_strings(source)

    def test_error_reports_line_and_column(self) -> None:
        """Line and column point at the offending character."""
        with pytest.raises(StringsSyntaxError) as exc_info:
            parse_strings('"a" = "1";\n"b" = "2"\n"c" = "3";', source_path="t.strings")
        error = exc_info.value
        assert error.line == 3
        assert error.column == 1
        assert error.source_path == "t.strings"
        assert str(error).startswith("t.strings:3:1:")


class TestParseStringsData:
    """Byte-level decoding and property-list flavours."""

    def test_utf16_with_bom(self) -> None:
        """UTF-16 resources (the platform's traditional encoding) are decoded."""
        data = '"k" = "Čau";'.encode("utf-16")
        assert parse_strings_data(data) == {"k": "Čau"}

    def test_utf8_with_bom(self) -> None:
        """UTF-8 BOM is stripped."""
        data = codecs.BOM_UTF8 + '"k" = "v";'.encode()
        assert parse_strings_data(data) == {"k": "v"}

    def test_invalid_utf8_raises(self) -> None:
        """Undecodable bytes raise UnicodeDecodeError."""
        with pytest.raises(UnicodeDecodeError):
            decode_strings_data(b'"k" = "\xff";')

    @pytest.mark.parametrize("fmt", [plistlib.FMT_XML, plistlib.FMT_BINARY])
    def test_plist_formats(self, fmt: plistlib.PlistFormat) -> None:
        """XML and binary property lists are accepted; non-strings skipped."""
        data = plistlib.dumps({"k": "v", "n": 3, "d": {"x": "y"}}, fmt=fmt)
        assert parse_strings_data(data) == {"k": "v"}

    def test_plist_root_must_be_dictionary(self) -> None:
        """A property list whose root is not a dictionary is rejected."""
        data = plistlib.dumps(["a", "b"], fmt=plistlib.FMT_XML)
        with pytest.raises(StringsSyntaxError):
            parse_strings_data(data)

    def test_corrupt_binary_plist(self) -> None:
        """Corrupt binary plists raise plistlib.InvalidFileException."""
        with pytest.raises(plistlib.InvalidFileException):
            parse_strings_data(b"bplist00garbage")

    def test_truncated_xml_plist_is_syntax_error(self) -> None:
        """A malformed XML plist raises StringsSyntaxError with its location."""
        data = b'<?xml version="1.0"?>\n<plist version="1.0"><dict><key>greeting</key>'
        with pytest.raises(StringsSyntaxError) as exc_info:
            parse_strings_data(data, source_path="cs.lproj/Localizable.strings")
        assert exc_info.value.line == 2
        assert exc_info.value.source_path == "cs.lproj/Localizable.strings"
        assert "Malformed XML property list" in str(exc_info.value)

    def test_xml_plist_without_declaration(self) -> None:
        """XML plists starting directly with <plist> are accepted."""
        data = (
            b'\n  <plist version="1.0"><dict>'
            b"<key>greeting</key><string>Ahoj</string>"
            b"</dict></plist>"
        )
        assert parse_strings_data(data) == {"greeting": "Ahoj"}


class TestParseStringsProperties:
    """Rendered tables parse back to the same mapping."""

    @given(table=string_tables())
    def test_rendered_table_parses_back(self, table: dict[str, str]) -> None:
        """render_strings output is read back unchanged."""
        event(f"entry_count={min(len(table), 10)}")
        assert parse_strings(render_strings(table)) == table
