# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the YAML lexical scanner."""

import pytest

from yamlkit.parser.errors import ParseError
from yamlkit.parser.lexer import Token, TokenType, tokenize

# ###############
# Test Helpers
# ###############


def _tokens_no_end(source: str) -> list[Token]:
    """Return all tokens except the terminal END token."""
    result = tokenize(source)
    assert result[-1].type == TokenType.END
    return result[:-1]


def _types(source: str) -> list[TokenType]:
    """Return the token types for all tokens except END."""
    return [tok.type for tok in _tokens_no_end(source)]


def _values(source: str) -> list[str]:
    """Return the token values for all tokens except END."""
    return [tok.value for tok in _tokens_no_end(source)]


# ###############
# End Handling
# ###############


class TestEnd:
    def test_empty_source_yields_only_end(self) -> None:
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.END
        assert tokens[0].value == ""

    def test_trailing_line_break_is_a_comment(self) -> None:
        assert _types("1\n") == [TokenType.INT, TokenType.COMMENT]

    def test_open_levels_are_closed_before_end(self) -> None:
        tokens = tokenize("- a")
        assert [t.type for t in tokens] == [
            TokenType.DASH,
            TokenType.INDENT,
            TokenType.STRING,
            TokenType.DEDENT,
            TokenType.END,
        ]


# ###############
# Literals
# ###############


class TestLiterals:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("null", TokenType.NULL),
            ("Null", TokenType.NULL),
            ("NULL", TokenType.NULL),
            ("~", TokenType.NULL),
            ("true", TokenType.TRUE),
            ("True", TokenType.TRUE),
            ("FALSE", TokenType.FALSE),
            (".inf", TokenType.INFINITY_POSITIVE),
            ("+.Inf", TokenType.INFINITY_POSITIVE),
            ("-.INF", TokenType.INFINITY_NEGATIVE),
            (".NaN", TokenType.NAN),
            ("42", TokenType.INT),
            ("-42", TokenType.INT),
            ("0o17", TokenType.INT_OCT),
            ("0x1F", TokenType.INT_HEX),
            ("-0x10", TokenType.INT_HEX),
            ("12:30:00", TokenType.INT_SEX),
            ("1.5", TokenType.DOUBLE),
            ("1e3", TokenType.DOUBLE),
            (".5", TokenType.DOUBLE),
            ("&anchor", TokenType.ANCHOR),
            ("*ref", TokenType.ALIAS),
            ('"quoted"', TokenType.STRING_DQ),
            ("'quoted'", TokenType.STRING_SQ),
        ],
    )
    def test_single_token(self, source: str, expected: TokenType) -> None:
        assert _types(source) == [expected]
        assert _values(source) == [source]

    @pytest.mark.parametrize("source", ["NuLL", "null#", "trueish", "12abc", "0o19"])
    def test_literal_without_boundary_is_a_string(self, source: str) -> None:
        assert _types(source) == [TokenType.STRING]
        assert _values(source) == [source]

    def test_literal_followed_by_comment(self) -> None:
        assert _types("null # note") == [TokenType.NULL, TokenType.SPACE, TokenType.COMMENT]

    def test_literals_terminated_by_flow_indicators(self) -> None:
        assert _types("[1,true]") == [
            TokenType.OPEN_BRACKET,
            TokenType.INT,
            TokenType.COMMA,
            TokenType.TRUE,
            TokenType.CLOSE_BRACKET,
        ]


# ###############
# Block Structure
# ###############


class TestBlockStructure:
    def test_mapping_entry_opens_indent_after_colon(self) -> None:
        assert _types("a: 1") == [
            TokenType.STRING,
            TokenType.COLON,
            TokenType.INDENT,
            TokenType.SPACE,
            TokenType.INT,
            TokenType.DEDENT,
        ]
        assert _values("a: 1") == ["a", ":", "", " ", "1", ""]

    def test_deeper_line_merges_with_colon_indent(self) -> None:
        tokens = _tokens_no_end("a:\n  b: 1")
        assert [t.type for t in tokens] == [
            TokenType.STRING,
            TokenType.COLON,
            TokenType.INDENT,
            TokenType.STRING,
            TokenType.COLON,
            TokenType.INDENT,
            TokenType.SPACE,
            TokenType.INT,
            TokenType.DEDENT,
            TokenType.DEDENT,
        ]
        assert tokens[2].value == "\n  "

    def test_sequence_entries_are_separated_by_dedent_and_newline(self) -> None:
        assert _types("- a\n- b") == [
            TokenType.DASH,
            TokenType.INDENT,
            TokenType.STRING,
            TokenType.DEDENT,
            TokenType.NEWLINE,
            TokenType.DASH,
            TokenType.INDENT,
            TokenType.STRING,
            TokenType.DEDENT,
        ]

    def test_dash_indent_carries_trailing_whitespace(self) -> None:
        tokens = _tokens_no_end("-   a")
        assert tokens[0].value == "-"
        assert tokens[1].type == TokenType.INDENT
        assert tokens[1].value == "   "

    def test_sequence_under_key_at_same_column(self) -> None:
        assert _types("a:\n- b") == [
            TokenType.STRING,
            TokenType.COLON,
            TokenType.INDENT,
            TokenType.NEWLINE,
            TokenType.DASH,
            TokenType.INDENT,
            TokenType.STRING,
            TokenType.DEDENT,
            TokenType.DEDENT,
        ]

    def test_question_mark_opens_indent(self) -> None:
        assert _types("? a") == [TokenType.QUESTION_MARK, TokenType.INDENT, TokenType.STRING, TokenType.DEDENT]

    def test_blank_and_comment_lines_are_comments(self) -> None:
        assert _types("1\n\n# note\n2") == [
            TokenType.INT,
            TokenType.COMMENT,
            TokenType.COMMENT,
            TokenType.NEWLINE,
            TokenType.INT,
        ]

    def test_plain_scalar_absorbs_trailing_blank_lines(self) -> None:
        assert _values("a\n\nb") == ["a\n\nb"]

    def test_document_markers(self) -> None:
        assert _types("---\na\n...") == [
            TokenType.DOC_START,
            TokenType.NEWLINE,
            TokenType.STRING,
            TokenType.NEWLINE,
            TokenType.DOC_END,
        ]

    def test_yaml_directive(self) -> None:
        assert _types("%YAML 1.2\n---") == [
            TokenType.YAML_DIRECTIVE,
            TokenType.SPACE,
            TokenType.DOUBLE,
            TokenType.NEWLINE,
            TokenType.DOC_START,
        ]


# ###############
# Flow Structure
# ###############


class TestFlowStructure:
    def test_flow_colon_opens_no_indent(self) -> None:
        assert _types("{a: 1}") == [
            TokenType.OPEN_BRACE,
            TokenType.STRING,
            TokenType.COLON,
            TokenType.SPACE,
            TokenType.INT,
            TokenType.CLOSE_BRACE,
        ]

    def test_deeper_lines_inside_flow_emit_nothing(self) -> None:
        assert _types("[\n  1,\n  2\n]") == [
            TokenType.OPEN_BRACKET,
            TokenType.INT,
            TokenType.COMMA,
            TokenType.INT,
            TokenType.NEWLINE,
            TokenType.CLOSE_BRACKET,
        ]

    def test_plain_scalar_may_contain_colon_inside_flow(self) -> None:
        assert _values("[http://example.com]") == ["[", "http://example.com", "]"]


# ###############
# Multi-line Scalars
# ###############


class TestMultiLineScalars:
    def test_plain_scalar_absorbs_continuation_lines(self) -> None:
        assert _values("a: x\n  y") == ["a", ":", "", " ", "x\ny", ""]

    def test_plain_scalar_stops_at_less_indented_line(self) -> None:
        assert _types("a: x\nb: y")[:6] == [
            TokenType.STRING,
            TokenType.COLON,
            TokenType.INDENT,
            TokenType.SPACE,
            TokenType.STRING,
            TokenType.DEDENT,
        ]

    def test_literal_block_is_resolved(self) -> None:
        tokens = _tokens_no_end("|\n  text\n")
        assert [t.type for t in tokens] == [TokenType.LITERAL, TokenType.STRING]
        assert tokens[1].value == "text\n"

    def test_folded_block_is_resolved(self) -> None:
        tokens = _tokens_no_end("a: >-\n  one\n  two\n")
        assert tokens[4].type == TokenType.FOLDED
        assert tokens[4].value == ">-"
        assert tokens[5].value == "one two"

    def test_empty_block_scalar(self) -> None:
        assert _values("|") == ["|", ""]


# ###############
# Source Locations
# ###############


class TestSourceLocations:
    def test_first_token_location(self) -> None:
        token = tokenize("a")[0]
        assert (token.line, token.column) == (1, 1)

    def test_location_on_later_line(self) -> None:
        tokens = _tokens_no_end("a:\n  b: 1")
        key = tokens[3]
        assert key.value == "b"
        assert (key.line, key.column) == (2, 3)

    def test_crlf_line_breaks(self) -> None:
        tokens = _tokens_no_end("a: 1\r\nb: 2")
        key = next(t for t in tokens if t.value == "b")
        assert (key.line, key.column) == (2, 1)


# ###############
# Errors
# ###############


class TestErrors:
    @pytest.mark.parametrize("source", ["@handle", "a: `cmd`"])
    def test_reserved_indicator(self, source: str) -> None:
        with pytest.raises(ParseError, match="reserved indicator"):
            tokenize(source)

    def test_reserved_indicator_message_has_snippet(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            tokenize("a: @b")
        assert str(exc_info.value) == "reserved indicator '@', near \"@b\""
        assert (exc_info.value.line, exc_info.value.column) == (1, 4)

    def test_unrecognized_input(self) -> None:
        with pytest.raises(ParseError, match="unrecognized input"):
            tokenize("\x01")

    def test_invalid_block_header(self) -> None:
        with pytest.raises(ParseError, match="invalid chomp or indent header"):
            tokenize("|0\n text")

    def test_block_less_indented_than_indicated(self) -> None:
        with pytest.raises(ParseError, match="less indented block scalar"):
            tokenize("|3\n\n  Radin")
