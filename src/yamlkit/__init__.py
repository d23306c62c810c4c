# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""yamlkit: a YAML parser producing JSON-compatible value trees."""

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
    from_python,
)
from yamlkit.parser.errors import ParseError
from yamlkit.parser.parser import parse_all, parse_one

__all__ = [
    "parse_one",
    "parse_all",
    "ParseError",
    "ParserOptions",
    "NullValue",
    "BoolValue",
    "IntValue",
    "FloatValue",
    "StringValue",
    "SequenceValue",
    "MappingEntry",
    "MappingValue",
    "Scalar",
    "Value",
    "from_python",
]
