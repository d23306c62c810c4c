# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Immutable cursor over a token list, threaded through every parse step."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from yamlkit.model.values import Value
from yamlkit.parser.errors import SNIPPET_LENGTH, ParseError
from yamlkit.parser.lexer import Token, TokenType

# ###############
# Public Interface
# ###############

# Tokens that carry no content between values.
SPACE_TYPES: frozenset[TokenType] = frozenset({TokenType.COMMENT, TokenType.SPACE, TokenType.NEWLINE})


@dataclass(frozen=True)
class ParseContext:
    """A position in the token list plus the anchors bound so far.

    Every operation returns a new context and leaves the receiver untouched,
    so a failed or abandoned parse path never affects its caller.

    Attributes:
        tokens: The complete token list of the input, ending with END.
        position: Index of the next unconsumed token.
        aliases: Values bound to anchor names in the current document.
    """

    tokens: tuple[Token, ...]
    position: int = 0
    aliases: Mapping[str, Value] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def start(cls, tokens: list[Token]) -> ParseContext:
        """Create a context positioned at the first token with no anchors bound."""
        return cls(tuple(tokens))

    @property
    def current(self) -> Token:
        """The next unconsumed token. Past the end this stays the END token."""
        return self.tokens[min(self.position, len(self.tokens) - 1)]

    def peek_type(self, offset: int = 0) -> TokenType:
        """Return the type of the token *offset* places ahead."""
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index].type

    def advance(self) -> ParseContext:
        """Consume the current token."""
        return replace(self, position=self.position + 1)

    def skip_space(self) -> ParseContext:
        """Consume any comments, spaces and line breaks."""
        position = self.position
        while self.tokens[position].type in SPACE_TYPES:
            position += 1
        return self if position == self.position else replace(self, position=position)

    def skip_document_end(self) -> ParseContext:
        """Consume comments, spaces, line breaks and "..." document end markers."""
        position = self.position
        while self.tokens[position].type in SPACE_TYPES or self.tokens[position].type is TokenType.DOC_END:
            position += 1
        return self if position == self.position else replace(self, position=position)

    def expect(self, token_type: TokenType, message: str) -> ParseContext:
        """Consume a token of *token_type*, or fail with *message*."""
        if self.current.type is not token_type:
            raise self.error(message)
        return self.advance()

    def bind(self, name: str, value: Value) -> ParseContext:
        """Bind *value* to an anchor *name*, replacing any earlier binding."""
        return replace(self, aliases=MappingProxyType({**self.aliases, name: value}))

    def without_aliases(self) -> ParseContext:
        """Forget every anchor, as happens at the start of each document."""
        return replace(self, aliases=MappingProxyType({}))

    def remaining_text(self) -> str:
        """Rebuild the unconsumed input from token texts, up to the snippet length."""
        parts: list[str] = []
        length = 0
        for token in self.tokens[self.position :]:
            if token.type is TokenType.END or length >= SNIPPET_LENGTH:
                break
            parts.append(token.value)
            length += len(token.value)
        return "".join(parts)

    def error(self, message: str) -> ParseError:
        """Build a ParseError located at the current token."""
        token = self.current
        return ParseError(message, self.remaining_text(), token.line, token.column)
