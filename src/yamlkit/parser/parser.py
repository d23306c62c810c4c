# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for YAML token streams.

Converts the tokens produced by the lexer into value trees. Every parse step
receives an immutable ParseContext and returns the advanced context together
with the value it built, or raises ParseError.
"""

import logging

from yamlkit.config.options import ParserOptions
from yamlkit.model.values import (
    BoolValue,
    FloatValue,
    IntValue,
    MappingEntry,
    MappingValue,
    NullValue,
    Scalar,
    SequenceValue,
    StringValue,
    Value,
)
from yamlkit.parser.context import ParseContext
from yamlkit.parser.lexer import TokenType, tokenize
from yamlkit.parser.scalars import (
    decode_double_quoted,
    decode_plain,
    decode_single_quoted,
    parse_integer,
    parse_sexagesimal,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def parse_one(text: str | bytes, options: ParserOptions | None = None) -> Value:
    """Parse YAML text holding exactly one document.

    An empty input, or one holding only comments, yields null.

    Args:
        text: The YAML text. Bytes are decoded as UTF-8.
        options: Parser options; defaults apply when omitted.

    Returns:
        The value of the document.

    Raises:
        ParseError: If the text is not a single well-formed document.
    """
    parser = _Parser(options or ParserOptions())
    context = ParseContext.start(tokenize(_decode(text)))
    context, value = parser.parse_document(context)
    context.expect(TokenType.END, "expected end")
    return value


def parse_all(text: str | bytes, options: ParserOptions | None = None) -> list[Value]:
    """Parse a YAML stream of zero or more documents.

    Documents are separated by ``---`` and may be terminated by ``...``. Anchors
    do not carry over from one document to the next.

    Args:
        text: The YAML text. Bytes are decoded as UTF-8.
        options: Parser options; defaults apply when omitted.

    Returns:
        The values of all documents in order.

    Raises:
        ParseError: If any document is malformed.
    """
    parser = _Parser(options or ParserOptions())
    context = ParseContext.start(tokenize(_decode(text)))
    documents: list[Value] = []
    while context.peek_type() is not TokenType.END:
        if documents and not _starts_document(context):
            raise context.error("expected end")
        position = context.position
        context, value = parser.parse_document(context)
        if context.position == position:
            raise context.error("expected end")
        documents.append(value)
    logger.debug("Parsed %d document(s)", len(documents))
    return documents


# ################
# Implementation
# ################

_STRING_TYPES: frozenset[TokenType] = frozenset({TokenType.STRING, TokenType.STRING_DQ, TokenType.STRING_SQ})

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _decode(text: str | bytes) -> str:
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    return text.removeprefix("\ufeff")


def _starts_document(context: ParseContext) -> bool:
    """True if a new document may begin here: after "..." or at "---" or a directive."""
    if context.peek_type() in (TokenType.DOC_START, TokenType.YAML_DIRECTIVE):
        return True
    position = context.position - 1
    while position >= 0 and context.tokens[position].type in (
        TokenType.COMMENT,
        TokenType.SPACE,
        TokenType.NEWLINE,
    ):
        position -= 1
    return position >= 0 and context.tokens[position].type is TokenType.DOC_END


class _Parser:
    """Recursive-descent parser for YAML token streams."""

    def __init__(self, options: ParserOptions) -> None:
        self._options = options

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def parse_document(self, context: ParseContext) -> tuple[ParseContext, Value]:
        """Parse the header and value of one document plus any trailing "..." marker."""
        context = self.parse_header(context)
        context, value = self.parse_value(context)
        return context.skip_document_end(), value

    def parse_header(self, context: ParseContext) -> ParseContext:
        """Consume leading comments, an optional %YAML directive and the "---" marker.

        Resets the anchor table, since anchors are scoped to one document.
        """
        context = context.without_aliases()
        directive_seen = False
        while True:
            context = context.skip_space()
            token_type = context.peek_type()
            if token_type is TokenType.YAML_DIRECTIVE:
                if directive_seen:
                    raise context.error("duplicate yaml directive")
                directive_seen = True
                context = context.advance().expect(TokenType.SPACE, "expected space")
                if context.current.value not in ("1.1", "1.2"):
                    raise context.error("invalid yaml version")
                context = context.advance()
            elif token_type is TokenType.DOC_START:
                return context.advance()
            elif directive_seen:
                raise context.error("expected ---")
            else:
                return context

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def parse_value(self, context: ParseContext) -> tuple[ParseContext, Value]:
        """Parse the value starting at the next non-space token."""
        context = context.skip_space()
        token = context.current
        token_type = token.type

        if token_type is TokenType.NULL:
            return context.advance(), NullValue()
        if token_type is TokenType.TRUE:
            return context.advance(), BoolValue(value=True)
        if token_type is TokenType.FALSE:
            return context.advance(), BoolValue(value=False)
        if token_type in (TokenType.INT, TokenType.INT_OCT, TokenType.INT_HEX, TokenType.INT_SEX):
            return context.advance(), self._parse_integer(context)
        if token_type is TokenType.INFINITY_POSITIVE:
            return context.advance(), FloatValue(value=float("inf"))
        if token_type is TokenType.INFINITY_NEGATIVE:
            return context.advance(), FloatValue(value=float("-inf"))
        if token_type is TokenType.NAN:
            return context.advance(), FloatValue(value=float("nan"))
        if token_type is TokenType.DOUBLE:
            return context.advance(), FloatValue(value=float(token.value))
        if token_type is TokenType.DASH:
            return self._parse_block_sequence(context)
        if token_type is TokenType.OPEN_BRACKET:
            return self._parse_flow_sequence(context)
        if token_type is TokenType.OPEN_BRACE:
            return self._parse_flow_mapping(context)
        if token_type is TokenType.QUESTION_MARK:
            return self._parse_block_mapping(context)
        if token_type in _STRING_TYPES:
            return self._parse_block_mapping_or_string(context)
        if token_type in (TokenType.LITERAL, TokenType.FOLDED):
            return self._parse_block_scalar(context)
        if token_type is TokenType.INDENT:
            context, value = self.parse_value(context.advance())
            context = context.skip_space().expect(TokenType.DEDENT, "expected dedent")
            return context, value
        if token_type is TokenType.ANCHOR:
            context, value = self.parse_value(context.advance())
            return context.bind(token.value[1:], value), value
        if token_type is TokenType.ALIAS:
            name = token.value[1:]
            if name not in context.aliases:
                raise context.error(f"unknown alias {name}")
            return context.advance(), context.aliases[name]
        if token_type in (TokenType.END, TokenType.DEDENT):
            return context, NullValue()
        raise context.error(f"unexpected {token_type.value}")

    def _parse_integer(self, context: ParseContext) -> IntValue:
        token = context.current
        if token.type is TokenType.INT_SEX:
            number = parse_sexagesimal(token.value)
        else:
            radix = {TokenType.INT: 10, TokenType.INT_OCT: 8, TokenType.INT_HEX: 16}[token.type]
            number = parse_integer(token.value, radix)
        if self._options.integer_overflow == "error" and not _INT64_MIN <= number <= _INT64_MAX:
            raise context.error("integer literal out of range")
        return IntValue(value=number)

    def _parse_string(self, context: ParseContext) -> tuple[ParseContext, StringValue]:
        """Parse one plain, double-quoted or single-quoted string token."""
        token = context.current
        if token.type is TokenType.STRING:
            text = decode_plain(token.value)
        elif token.type is TokenType.STRING_DQ:
            text = decode_double_quoted(token.value)
        elif token.type is TokenType.STRING_SQ:
            text = decode_single_quoted(token.value)
        else:
            raise context.error("expected string")
        return context.advance(), StringValue(value=text)

    def _parse_block_scalar(self, context: ParseContext) -> tuple[ParseContext, Value]:
        """Parse a "|" or ">" header; the lexer has already produced the finished text."""
        context = context.advance()
        if context.peek_type() is not TokenType.STRING:
            raise context.error("expected scalar block")
        return context.advance(), StringValue(value=context.current.value)

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    def _parse_block_sequence(self, context: ParseContext) -> tuple[ParseContext, Value]:
        """Parse consecutive "-" entries at one indentation level."""
        items: list[Value] = []
        while context.peek_type() is TokenType.DASH:
            context = context.advance().expect(TokenType.INDENT, "expected indent after dash")
            context, item = self.parse_value(context.skip_space())
            context = context.skip_space().expect(TokenType.DEDENT, "expected dedent after dash indent")
            context = context.skip_space()
            items.append(item)
        return context, SequenceValue(items=tuple(items))

    def _parse_flow_sequence(self, context: ParseContext) -> tuple[ParseContext, Value]:
        """Parse a bracketed, comma-separated sequence."""
        context = context.expect(TokenType.OPEN_BRACKET, "expected [")
        items: list[Value] = []
        while True:
            context = context.skip_space()
            if context.peek_type() is TokenType.CLOSE_BRACKET:
                return context.advance(), SequenceValue(items=tuple(items))
            if items:
                context = context.expect(TokenType.COMMA, "expected comma").skip_space()
            context, item = self.parse_value(context)
            items.append(item)

    # ------------------------------------------------------------------
    # Mappings
    # ------------------------------------------------------------------

    def _parse_flow_mapping(self, context: ParseContext) -> tuple[ParseContext, Value]:
        """Parse a braced, comma-separated mapping with string keys."""
        context = context.expect(TokenType.OPEN_BRACE, "expected {")
        entries: list[MappingEntry] = []
        keys: set[Scalar] = set()
        while True:
            context = context.skip_space()
            if context.peek_type() is TokenType.CLOSE_BRACE:
                return context.advance(), MappingValue(entries=tuple(entries))
            if entries:
                context = context.expect(TokenType.COMMA, "expected comma").skip_space()
            key_context = context
            context, key = self._parse_string(context)
            self._check_unique(key_context, keys, key)
            context = context.skip_space().expect(TokenType.COLON, "expected colon")
            context, value = self.parse_value(context)
            entries.append(MappingEntry(key=key, value=value))

    def _parse_block_mapping_or_string(self, context: ParseContext) -> tuple[ParseContext, Value]:
        """Parse a single-line string followed by ":" as a mapping, anything else as a string."""
        offset = 1
        while context.peek_type(offset) is TokenType.SPACE:
            offset += 1
        if context.peek_type(offset) is TokenType.COLON and "\n" not in context.current.value:
            return self._parse_block_mapping(context)
        return self._parse_string(context)

    def _parse_block_mapping(self, context: ParseContext) -> tuple[ParseContext, Value]:
        """Parse consecutive "key: value" and "? key : value" entries at one indentation level."""
        entries: list[MappingEntry] = []
        keys: set[Scalar] = set()
        while True:
            token_type = context.peek_type()
            key_context = context
            if token_type is TokenType.QUESTION_MARK:
                context, key_value = self.parse_value(context.advance())
                key = self._as_key(key_context, key_value)
                self._check_unique(key_context, keys, key)
                context = context.skip_space()
                if context.peek_type() is TokenType.COLON:
                    context, value = self._parse_colon_value(context)
                else:
                    value = NullValue()
            elif token_type in _STRING_TYPES:
                context, key = self._parse_string(context)
                self._check_unique(key_context, keys, key)
                context, value = self._parse_colon_value(context.skip_space())
            else:
                return context, MappingValue(entries=tuple(entries))
            entries.append(MappingEntry(key=key, value=value))
            context = context.skip_space()

    def _parse_colon_value(self, context: ParseContext) -> tuple[ParseContext, Value]:
        context = context.expect(TokenType.COLON, "expected colon")
        return self.parse_value(context.skip_space())

    @staticmethod
    def _as_key(context: ParseContext, value: Value) -> Scalar:
        """Return *value* as a mapping key, rejecting collections."""
        if isinstance(value, SequenceValue | MappingValue):
            raise context.error("mapping key must be a scalar")
        return value

    @staticmethod
    def _check_unique(context: ParseContext, keys: set[Scalar], key: Scalar) -> None:
        """Record *key*, failing if the mapping already holds an equal key."""
        if key in keys:
            raise context.error(f"duplicate key {key.to_python()!r}")
        keys.add(key)
