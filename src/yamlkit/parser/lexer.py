# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for YAML text.

Converts raw text into a flat list of tokens. Block structure is made explicit
through synthetic INDENT and DEDENT tokens, and block scalars (``|`` and ``>``)
are fully resolved here because their extent depends on indentation that the
parser no longer sees.
"""

import bisect
import enum
import functools
import logging
import re
from dataclasses import dataclass

from yamlkit.parser.errors import ParseError
from yamlkit.parser.scalars import decode_block_scalar

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the YAML lexer."""

    # Document structure
    YAML_DIRECTIVE = "%YAML"
    DOC_START = "---"
    DOC_END = "..."

    # Layout
    COMMENT = "comment"
    SPACE = "space"
    NEWLINE = "newline"
    INDENT = "indent"
    DEDENT = "dedent"

    # Keyword and numeric literals
    NULL = "null"
    TRUE = "true"
    FALSE = "false"
    INFINITY_POSITIVE = "+.inf"
    INFINITY_NEGATIVE = "-.inf"
    NAN = ".nan"
    DOUBLE = "double"
    INT = "int"
    INT_OCT = "int-oct"
    INT_HEX = "int-hex"
    INT_SEX = "int-sex"

    # Anchors and aliases
    ANCHOR = "anchor"
    ALIAS = "alias"

    # Indicators
    COMMA = ","
    OPEN_BRACKET = "["
    CLOSE_BRACKET = "]"
    DASH = "-"
    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    QUESTION_MARK = "?"
    COLON_FLOW_OUT = "colon-flow-out"
    COLON_FLOW_IN = "colon-flow-in"
    COLON = ":"
    LITERAL = "|"
    FOLDED = ">"
    RESERVED = "reserved"

    # Strings
    STRING_DQ = "string-dq"
    STRING_SQ = "string-sq"
    STRING_FLOW_IN = "string-flow-in"
    STRING_FLOW_OUT = "string-flow-out"
    STRING = "string"

    # End of input
    END = "end"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The matched text. Synthetic DEDENT and END tokens carry an empty
            string, and the STRING token following a block scalar header
            carries the finished scalar content.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


def tokenize(source: str) -> list[Token]:
    """Tokenize YAML text into a sequence of tokens.

    The final token is always an END token, preceded by one DEDENT for every
    indentation level still open.

    Args:
        source: The full YAML text, possibly containing several documents.

    Returns:
        A list of Token objects ending with a single END token.

    Raises:
        ParseError: If some input matches no token pattern, uses a reserved
            indicator, or contains an invalid block scalar.
    """
    tokens = _Lexer(source).tokenize()
    logger.debug("Tokenized %d characters into %d tokens", len(source), len(tokens))
    return tokens


# ################
# Implementation
# ################

_BREAK = r"(?:\r\n|\r|\n)"

# Printable non-space characters except ":", "#", ",", "[", "]", "{" and "}".
_SAFE_IN = (
    r"\x21\x22\x24-\x2b\x2d-\x39\x3b-\x5a\x5c\x5e-\x7a"
    r"\x7c\x7e\x85\xa0-\ud7ff\ue000-\ufefe\uff00\ufffd"
    r"\U00010000-\U0010ffff"
)
# The same, plus the flow indicators.
_SAFE_OUT = r"\x2c\x5b\x5d\x7b\x7d" + _SAFE_IN

_PLAIN_OUT = rf"(?:[{_SAFE_OUT}]#|:(?![ \t]|{_BREAK})|[{_SAFE_OUT}]|[ \t])+"
_PLAIN_IN = rf"(?:[{_SAFE_IN}]#|:(?![ \t]|{_BREAK})|[{_SAFE_IN}]|[ \t]|{_BREAK})+"

# A literal must be followed by a flow terminator, a comment or the end of the line.
_FINISH = rf"(?= *(?:,|\]|\}}|(?: #[^\r\n]*)?(?:{_BREAK}|\Z)))"

# "---" or "..." standing alone at the start of a line.
_DOCUMENT_MARKER = rf"(?:---|\.\.\.)(?=[ \t]|{_BREAK}|\Z)"

_DASH = re.compile(rf"-(?:[ \t]+(?!#|{_BREAK})|(?=[ \t\n]))")

_TOKEN_PATTERNS: list[tuple[TokenType, re.Pattern[str]]] = [
    (TokenType.YAML_DIRECTIVE, re.compile(r"%YAML(?= )")),
    (TokenType.DOC_START, re.compile(r"---")),
    (TokenType.DOC_END, re.compile(r"\.\.\.")),
    (TokenType.COMMENT, re.compile(rf"#[^\r\n]*|{_BREAK} *(?:#[^\r\n]*)?(?={_BREAK}|\Z)")),
    (TokenType.SPACE, re.compile(r" +")),
    (TokenType.NEWLINE, re.compile(rf"({_BREAK})( *)")),
    (TokenType.DASH, _DASH),
    (TokenType.NULL, re.compile(rf"(?:null|Null|NULL|~){_FINISH}")),
    (TokenType.TRUE, re.compile(rf"(?:true|True|TRUE){_FINISH}")),
    (TokenType.FALSE, re.compile(rf"(?:false|False|FALSE){_FINISH}")),
    (TokenType.INFINITY_POSITIVE, re.compile(rf"\+?\.(?:inf|Inf|INF){_FINISH}")),
    (TokenType.INFINITY_NEGATIVE, re.compile(rf"-\.(?:inf|Inf|INF){_FINISH}")),
    (TokenType.NAN, re.compile(rf"\.(?:nan|NaN|NAN){_FINISH}")),
    (TokenType.INT, re.compile(rf"[-+]?[0-9]+{_FINISH}")),
    (TokenType.INT_OCT, re.compile(rf"[-+]?0o[0-7]+{_FINISH}")),
    (TokenType.INT_HEX, re.compile(rf"[-+]?0x[0-9a-fA-F]+{_FINISH}")),
    (TokenType.INT_SEX, re.compile(rf"[-+]?[0-9]{{2}}(?::[0-9]{{2}})+{_FINISH}")),
    (TokenType.DOUBLE, re.compile(rf"[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?{_FINISH}")),
    (TokenType.ANCHOR, re.compile(r"&\w+")),
    (TokenType.ALIAS, re.compile(r"\*\w+")),
    (TokenType.COMMA, re.compile(r",")),
    (TokenType.OPEN_BRACKET, re.compile(r"\[")),
    (TokenType.CLOSE_BRACKET, re.compile(r"\]")),
    (TokenType.OPEN_BRACE, re.compile(r"\{")),
    (TokenType.CLOSE_BRACE, re.compile(r"\}")),
    (TokenType.QUESTION_MARK, re.compile(rf"\?(?: +|(?={_BREAK}))")),
    (TokenType.COLON_FLOW_OUT, re.compile(r":(?!:)")),
    (TokenType.COLON_FLOW_IN, re.compile(r":(?!:)")),
    (TokenType.LITERAL, re.compile(r"\|[^\r\n]*")),
    (TokenType.FOLDED, re.compile(r">[^\r\n]*")),
    (TokenType.RESERVED, re.compile(r"[@`]")),
    (TokenType.STRING_DQ, re.compile(rf'"(?:[^\\"]|\\(?:[^\r\n]|{_BREAK}))*"')),
    (TokenType.STRING_SQ, re.compile(r"'(?:[^']|'')*'")),
    (TokenType.STRING_FLOW_OUT, re.compile(rf"{_PLAIN_OUT}(?=:(?:[ \t]|{_BREAK})|{_BREAK}|\Z)")),
    (TokenType.STRING_FLOW_IN, re.compile(_PLAIN_IN)),
]

_LEADING_BREAK = re.compile(rf"^{_BREAK}")
_AT_BREAK = re.compile(_BREAK)
_CONTINUATION_EDGES = re.compile(rf"^{_BREAK}[ \t]*|[ \t]+$")
_OUTER_BLANKS = re.compile(r"^[ \t]+|[ \t]+$")

_SNIPPET_WINDOW = 64


@functools.lru_cache(maxsize=64)
def _block_body_pattern(min_indent: int) -> re.Pattern[str]:
    """Match the lines of a block scalar indented by at least *min_indent* spaces."""
    return re.compile(
        rf"(?:{_BREAK} *)*{_BREAK}( {{{min_indent},}})[^ ][^\r\n]*(?:{_BREAK}(?: *|\1[^\r\n]*))*(?={_BREAK}|\Z)"
    )


@functools.lru_cache(maxsize=64)
def _enclosing_indent_patterns(indent: int) -> tuple[re.Pattern[str], re.Pattern[str]]:
    """Patterns removing up to *indent* spaces of enclosing indentation per line."""
    return re.compile(rf"^ {{0,{indent}}}"), re.compile(rf"{_BREAK} {{0,{indent}}}")


@functools.lru_cache(maxsize=64)
def _continuation_pattern(indent: int) -> re.Pattern[str]:
    """Match a blank line or a plain-scalar line indented by at least *indent* spaces.

    Document markers at the start of a line never continue a scalar.
    """
    return re.compile(rf"{_BREAK}(?!{_DOCUMENT_MARKER})(?: *| {{{indent},}}{_PLAIN_OUT})(?={_BREAK}|\Z)")


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._tokens: list[Token] = []
        self._indents = [0]
        self._flow_depth = 0
        self._line_starts = [0] + [m.end() for m in _AT_BREAK.finditer(source)]

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal END."""
        while self._pos < len(self._source):
            self._scan_token()
        while len(self._indents) > 1:
            self._indents.pop()
            self._emit(TokenType.DEDENT, "", self._pos)
        self._emit(TokenType.END, "", self._pos)
        return self._tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, token_type: TokenType, value: str, offset: int) -> None:
        """Append a token starting at *offset* of the source."""
        line, column = self._location(offset)
        self._tokens.append(Token(token_type, value, line, column))

    def _location(self, offset: int) -> tuple[int, int]:
        """Return the 1-based line and column of a source offset."""
        line = bisect.bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    def _error(self, reason: str, offset: int) -> ParseError:
        """Build a ParseError quoting the source from *offset* on."""
        line, column = self._location(offset)
        return ParseError(reason, self._source[offset : offset + _SNIPPET_WINDOW], line, column)

    # ------------------------------------------------------------------
    # Token dispatch
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Consume one token using the first pattern that accepts the input."""
        for token_type, pattern in _TOKEN_PATTERNS:
            match = pattern.match(self._source, self._pos)
            if match is None:
                continue
            if self._accept(token_type, match):
                return
        raise self._error("unrecognized input", self._pos)

    def _accept(self, token_type: TokenType, match: re.Match[str]) -> bool:
        """Handle a pattern match. Returns False if the pattern does not apply here."""
        if token_type is TokenType.NEWLINE:
            self._scan_newline(match)
        elif token_type in (TokenType.DASH, TokenType.QUESTION_MARK):
            self._scan_entry_marker(token_type, match)
        elif token_type in (TokenType.COLON_FLOW_OUT, TokenType.COLON_FLOW_IN):
            if token_type is TokenType.COLON_FLOW_OUT and self._flow_depth > 0:
                return False
            self._scan_colon(match)
        elif token_type in (TokenType.OPEN_BRACKET, TokenType.OPEN_BRACE):
            self._flow_depth += 1
            self._emit_match(token_type, match)
        elif token_type in (TokenType.CLOSE_BRACKET, TokenType.CLOSE_BRACE):
            self._flow_depth -= 1
            self._emit_match(token_type, match)
        elif token_type in (TokenType.LITERAL, TokenType.FOLDED):
            self._scan_block_scalar(token_type, match)
        elif token_type is TokenType.STRING_FLOW_OUT:
            if self._flow_depth > 0:
                return False
            self._scan_plain_flow_out(match)
        elif token_type is TokenType.STRING_FLOW_IN:
            self._emit(TokenType.STRING, match.group(), match.start())
            self._pos = match.end()
        elif token_type is TokenType.RESERVED:
            raise self._error(f"reserved indicator {match.group()!r}", match.start())
        else:
            self._emit_match(token_type, match)
        return True

    def _emit_match(self, token_type: TokenType, match: re.Match[str]) -> None:
        self._emit(token_type, match.group(), match.start())
        self._pos = match.end()

    # ------------------------------------------------------------------
    # Indentation
    # ------------------------------------------------------------------

    def _scan_newline(self, match: re.Match[str]) -> None:
        """Translate a line break and the following indentation into layout tokens."""
        spaces = len(match.group(2))
        top = self._indents[-1]
        nested_entry = _DASH.match(self._source, match.end()) is not None
        start = match.start()
        self._pos = match.end()

        if spaces == top:
            self._emit(TokenType.NEWLINE, match.group(), start)
        elif spaces > top:
            if self._flow_depth > 0:
                return
            if self._tokens and self._tokens[-1].type is TokenType.INDENT:
                # Merge with the indentation opened by a preceding "-", "?" or ":".
                self._indents[-1] = spaces
                previous = self._tokens[-1]
                self._tokens[-1] = Token(TokenType.INDENT, match.group(), previous.line, previous.column)
            else:
                self._indents.append(spaces)
                self._emit(TokenType.INDENT, match.group(), start)
        elif nested_entry and spaces == top - 1:
            self._emit(TokenType.NEWLINE, match.group(), start)
        else:
            while (nested_entry and spaces < self._indents[-1] - 1) or (
                not nested_entry and spaces < self._indents[-1]
            ):
                self._indents.pop()
                self._emit(TokenType.DEDENT, "", start)
            self._emit(TokenType.NEWLINE, match.group(), start)

    def _scan_entry_marker(self, token_type: TokenType, match: re.Match[str]) -> None:
        """Emit a "-" or "?" marker and open an indentation level covering it."""
        text = match.group()
        self._indents.append(self._indents[-1] + len(text))
        self._emit(token_type, text[0], match.start())
        self._emit(TokenType.INDENT, text[1:], match.start() + 1)
        self._pos = match.end()

    def _scan_colon(self, match: re.Match[str]) -> None:
        self._emit(TokenType.COLON, match.group(), match.start())
        self._pos = match.end()
        if self._flow_depth == 0:
            self._indents.append(self._indents[-1] + 1)
            self._emit(TokenType.INDENT, "", self._pos)

    # ------------------------------------------------------------------
    # Multi-line scalars
    # ------------------------------------------------------------------

    def _scan_plain_flow_out(self, match: re.Match[str]) -> None:
        """Emit a block-context plain scalar together with its continuation lines."""
        block = _OUTER_BLANKS.sub("", match.group())
        self._pos = match.end()
        continuation = _continuation_pattern(self._indents[-1])
        while True:
            line = continuation.match(self._source, self._pos)
            if line is None:
                break
            block += "\n" + _CONTINUATION_EDGES.sub("", line.group())
            self._pos = line.end()
        self._emit(TokenType.STRING, block, match.start())

    def _scan_block_scalar(self, token_type: TokenType, match: re.Match[str]) -> None:
        """Emit a block scalar header followed by the finished scalar as a STRING token."""
        header = match.group()
        self._emit(token_type, header, match.start())
        self._pos = match.end()

        enclosing = self._indents[-1]
        body = _block_body_pattern(enclosing + 1).match(self._source, self._pos)
        lead = body.group() if body else ""
        body_start = self._pos
        if body is not None:
            self._pos = body.end()

        first_line, following_lines = _enclosing_indent_patterns(enclosing)
        block = _LEADING_BREAK.sub("", lead, count=1)
        block = first_line.sub("", block, count=1)
        block = following_lines.sub("\n", block)
        if lead and _AT_BREAK.match(self._source, self._pos):
            block += "\n"

        try:
            text = decode_block_scalar(header, block)
        except ValueError as exc:
            raise self._error(str(exc), match.start()) from exc
        self._emit(TokenType.STRING, text, body_start)
