# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion between value trees and JSON."""

from yamlkit.interop.json_codec import (
    JSONConversionError,
    deserialize,
    from_json_compatible,
    serialize,
    to_json_compatible,
    write_json,
)

__all__ = [
    "JSONConversionError",
    "to_json_compatible",
    "from_json_compatible",
    "serialize",
    "deserialize",
    "write_json",
]
