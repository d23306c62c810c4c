# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value tree representations produced by the YAML parser.

Every parsed document becomes one immutable, JSON-compatible value: null, a
boolean, an integer, a float, a string, a sequence of values or a mapping from
scalar keys to values. Values compare by type and content, so ``BoolValue(True)``
is never equal to ``IntValue(1)``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class _ValueBase(BaseModel):
    """Shared accessors for all value variants."""

    model_config = ConfigDict(frozen=True, strict=True)

    @property
    def is_null(self) -> bool:
        """True if this value is null."""
        return isinstance(self, NullValue)

    @property
    def count(self) -> int:
        """Number of elements: 0 for null, 1 for other scalars, the length of collections."""
        if isinstance(self, NullValue):
            return 0
        if isinstance(self, SequenceValue):
            return len(self.items)
        if isinstance(self, MappingValue):
            return len(self.entries)
        return 1

    @property
    def as_str(self) -> str | None:
        return self.value if isinstance(self, StringValue) else None

    @property
    def as_int(self) -> int | None:
        return self.value if isinstance(self, IntValue) else None

    @property
    def as_float(self) -> float | None:
        return self.value if isinstance(self, FloatValue) else None

    @property
    def as_number(self) -> float | None:
        """The numeric payload widened to float, for both integers and floats."""
        if isinstance(self, IntValue):
            return float(self.value)
        if isinstance(self, FloatValue):
            return self.value
        return None

    @property
    def as_bool(self) -> bool | None:
        return self.value if isinstance(self, BoolValue) else None

    @property
    def as_list(self) -> list[Value] | None:
        return list(self.items) if isinstance(self, SequenceValue) else None

    @property
    def as_dict(self) -> dict[Scalar, Value] | None:
        if isinstance(self, MappingValue):
            return {entry.key: entry.value for entry in self.entries}
        return None

    def lookup(self, key: Any) -> Value | None:
        """Return the value stored under *key* in a mapping.

        Args:
            key: A scalar value model or a plain Python scalar (``None``, ``bool``,
                ``int``, ``float`` or ``str``).

        Returns:
            The associated value, or ``None`` if this is not a mapping or the key
            is absent.
        """
        if not isinstance(self, MappingValue):
            return None
        wanted = key if isinstance(key, _ValueBase) else from_python(key)
        for entry in self.entries:
            if entry.key == wanted:
                return entry.value
        return None

    def at(self, index: int) -> Value | None:
        """Return the sequence element at *index*, or ``None`` when out of range."""
        if not isinstance(self, SequenceValue):
            return None
        if -len(self.items) <= index < len(self.items):
            return self.items[index]
        return None

    def to_python(self) -> Any:
        """Convert the value tree to native Python objects.

        Raises:
            ValueError: If two distinct mapping keys collapse onto the same
                Python dictionary key (for example ``true`` and ``1``).
        """
        if isinstance(self, NullValue):
            return None
        if isinstance(self, SequenceValue):
            return [item.to_python() for item in self.items]
        if isinstance(self, MappingValue):
            result: dict[Any, Any] = {}
            for entry in self.entries:
                native_key = entry.key.to_python()
                if native_key in result:
                    raise ValueError(f"mapping keys collide as Python keys: {native_key!r}")
                result[native_key] = entry.value.to_python()
            return result
        return self.value  # type: ignore[attr-defined]


class NullValue(_ValueBase):
    """The null scalar (``null``, ``~`` or an absent value)."""

    kind: Literal["null"] = "null"


class BoolValue(_ValueBase):
    """A boolean scalar."""

    kind: Literal["bool"] = "bool"
    value: bool


class IntValue(_ValueBase):
    """An integer scalar from a decimal, octal, hexadecimal or sexagesimal literal."""

    kind: Literal["int"] = "int"
    value: int


class FloatValue(_ValueBase):
    """A floating-point scalar, including infinities and NaN."""

    kind: Literal["float"] = "float"
    value: float


class StringValue(_ValueBase):
    """A string scalar in any of the five scalar styles."""

    kind: Literal["string"] = "string"
    value: str


class SequenceValue(_ValueBase):
    """An ordered list of values."""

    kind: Literal["sequence"] = "sequence"
    items: tuple[Value, ...] = ()


class MappingEntry(BaseModel):
    """A single key/value pair of a mapping."""

    model_config = ConfigDict(frozen=True, strict=True)

    key: Scalar
    value: Value


class MappingValue(_ValueBase):
    """An insertion-ordered mapping from scalar keys to values.

    Keys are unique under value equality.
    """

    kind: Literal["mapping"] = "mapping"
    entries: tuple[MappingEntry, ...] = ()

    @model_validator(mode="after")
    def _check_unique_keys(self) -> MappingValue:
        seen: set[Scalar] = set()
        for entry in self.entries:
            if entry.key in seen:
                raise ValueError(f"duplicate key {entry.key.to_python()!r}")
            seen.add(entry.key)
        return self


# A mapping key: one of the five scalar variants.
Scalar = Annotated[
    NullValue | BoolValue | IntValue | FloatValue | StringValue,
    _Field(discriminator="kind"),
]

# Any node of a parsed document.
Value = Annotated[
    NullValue | BoolValue | IntValue | FloatValue | StringValue | SequenceValue | MappingValue,
    _Field(discriminator="kind"),
]


def from_python(obj: Any) -> Value:
    """Build a value tree from native Python objects.

    Lists and tuples become sequences and dictionaries become mappings; their
    keys must be scalars.

    Raises:
        TypeError: If *obj* (or a nested element) has no value representation.
    """
    if obj is None:
        return NullValue()
    if isinstance(obj, bool):
        return BoolValue(value=obj)
    if isinstance(obj, int):
        return IntValue(value=obj)
    if isinstance(obj, float):
        return FloatValue(value=obj)
    if isinstance(obj, str):
        return StringValue(value=obj)
    if isinstance(obj, list | tuple):
        return SequenceValue(items=tuple(from_python(item) for item in obj))
    if isinstance(obj, dict):
        entries = []
        for key, item in obj.items():
            key_value = from_python(key)
            if isinstance(key_value, SequenceValue | MappingValue):
                raise TypeError(f"mapping keys must be scalars, got {type(key).__name__}")
            entries.append(MappingEntry(key=key_value, value=from_python(item)))
        return MappingValue(entries=tuple(entries))
    raise TypeError(f"cannot convert {type(obj).__name__} to a value")


# Resolve forward references for models that refer to Value or Scalar.
SequenceValue.model_rebuild()
MappingEntry.model_rebuild()
MappingValue.model_rebuild()
