# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for ParseError formatting."""

from yamlkit.parser.errors import SNIPPET_LENGTH, ParseError, format_snippet


class TestFormatSnippet:
    def test_short_text_is_kept(self) -> None:
        assert format_snippet("a: 1") == "a: 1"

    def test_long_text_is_truncated(self) -> None:
        assert format_snippet("y" * 200) == "y" * SNIPPET_LENGTH

    def test_line_breaks_and_quotes_are_escaped(self) -> None:
        assert format_snippet('a\r\nb "c"') == 'a\\r\\nb \\"c\\"'

    def test_truncation_happens_before_escaping(self) -> None:
        text = "z" * (SNIPPET_LENGTH - 1) + "\n" + "tail"
        assert format_snippet(text) == "z" * (SNIPPET_LENGTH - 1) + "\\n"


class TestParseError:
    def test_message_includes_snippet(self) -> None:
        error = ParseError("expected colon", "{x:1}\n", 1, 2)
        assert str(error) == 'expected colon, near "{x:1}\\n"'
        assert error.message == str(error)
        assert error.reason == "expected colon"
        assert error.snippet == "{x:1}\\n"
        assert (error.line, error.column) == (1, 2)

    def test_location_is_optional(self) -> None:
        error = ParseError("expected end", "")
        assert error.line is None
        assert error.column is None
        assert str(error) == 'expected end, near ""'

    def test_is_an_exception(self) -> None:
        assert isinstance(ParseError("x", ""), Exception)
