# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generic, JSON-compatible value tree produced by the YAML parser."""

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

__all__ = [
    # Scalars
    "NullValue",
    "BoolValue",
    "IntValue",
    "FloatValue",
    "StringValue",
    "Scalar",
    # Collections
    "SequenceValue",
    "MappingEntry",
    "MappingValue",
    "Value",
    "from_python",
]
