# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for YAML text."""

from yamlkit.parser.errors import ParseError
from yamlkit.parser.lexer import Token, TokenType, tokenize
from yamlkit.parser.parser import parse_all, parse_one

__all__ = [
    "parse_one",
    "parse_all",
    "tokenize",
    "Token",
    "TokenType",
    "ParseError",
]
