# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""JSON serialization of parsed YAML values.

JSON objects only accept string keys, while YAML mappings may be keyed by
null, booleans and numbers. Such keys are either converted to their canonical
YAML spelling (``"null"``, ``"true"``, ``"12"``) or rejected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from yamlkit.model.values import (
    BoolValue,
    FloatValue,
    IntValue,
    MappingValue,
    NullValue,
    Scalar,
    SequenceValue,
    StringValue,
    Value,
    from_python,
)

# ###############
# Public Interface
# ###############

KeyPolicy = Literal["stringify", "reject"]


class JSONConversionError(ValueError):
    """Raised when a value cannot be represented as JSON, or JSON text is invalid."""


def to_json_compatible(value: Value, non_string_keys: KeyPolicy = "stringify") -> Any:
    """Convert a value tree to objects accepted by :func:`json.dumps`.

    Args:
        value: The value tree to convert.
        non_string_keys: How to treat mapping keys that are not strings.

    Returns:
        ``None``, a ``bool``, ``int``, ``float``, ``str``, ``list`` or ``dict``.

    Raises:
        JSONConversionError: If a non-string key is met under the ``"reject"``
            policy, or two keys of one mapping convert to the same string.
    """
    if isinstance(value, SequenceValue):
        return [to_json_compatible(item, non_string_keys) for item in value.items]
    if isinstance(value, MappingValue):
        result: dict[str, Any] = {}
        for entry in value.entries:
            key = _key_to_string(entry.key, non_string_keys)
            if key in result:
                raise JSONConversionError(f"mapping keys collide as JSON object key {key!r}")
            result[key] = to_json_compatible(entry.value, non_string_keys)
        return result
    return value.to_python()


def from_json_compatible(obj: Any) -> Value:
    """Build a value tree from decoded JSON objects.

    Raises:
        JSONConversionError: If *obj* contains objects JSON cannot produce.
    """
    try:
        return from_python(obj)
    except TypeError as exc:
        raise JSONConversionError(str(exc)) from exc


def serialize(value: Value, *, indent: int | None = None, non_string_keys: KeyPolicy = "stringify") -> str:
    """Serialize a value tree to a JSON string.

    Without *indent* the output is compact. Infinite and NaN floats are written
    as ``Infinity``, ``-Infinity`` and ``NaN``, as :mod:`json` does.
    """
    data = to_json_compatible(value, non_string_keys)
    if indent is None:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(data, indent=indent, ensure_ascii=False)


def deserialize(data: str) -> Value:
    """Deserialize a value tree from a JSON string.

    Raises:
        JSONConversionError: If *data* is not valid JSON.
    """
    try:
        obj = json.loads(data)
    except json.JSONDecodeError as exc:
        raise JSONConversionError(f"Invalid JSON: {exc}") from exc
    return from_json_compatible(obj)


def write_json(value: Value, path: Path, *, indent: int | None = None, non_string_keys: KeyPolicy = "stringify") -> None:
    """Write the JSON form of *value* to *path*, creating parent directories as needed."""
    text = serialize(value, indent=indent, non_string_keys=non_string_keys)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")


# ################
# Implementation
# ################


def _key_to_string(key: Scalar, policy: KeyPolicy) -> str:
    if isinstance(key, StringValue):
        return key.value
    if policy == "reject":
        raise JSONConversionError(f"non-string mapping key {key.to_python()!r} cannot be represented in JSON")
    if isinstance(key, NullValue):
        return "null"
    if isinstance(key, BoolValue):
        return "true" if key.value else "false"
    if isinstance(key, IntValue):
        return str(key.value)
    if isinstance(key, FloatValue):
        return json.dumps(key.value)
    raise JSONConversionError(f"unsupported mapping key {key!r}")
