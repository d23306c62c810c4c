# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the value tree models."""

import math

import pytest
from pydantic import ValidationError

from yamlkit.model.values import (
    BoolValue,
    FloatValue,
    IntValue,
    MappingEntry,
    MappingValue,
    NullValue,
    SequenceValue,
    StringValue,
    from_python,
)

# ###############
# Test Helpers
# ###############


def _mapping(**items: int) -> MappingValue:
    return MappingValue(
        entries=tuple(MappingEntry(key=StringValue(value=k), value=IntValue(value=v)) for k, v in items.items())
    )


# ###############
# Equality and Construction
# ###############


class TestEquality:
    def test_equal_scalars(self) -> None:
        assert IntValue(value=3) == IntValue(value=3)
        assert StringValue(value="a") == StringValue(value="a")
        assert NullValue() == NullValue()

    def test_bool_is_not_int(self) -> None:
        assert BoolValue(value=True) != IntValue(value=1)

    def test_int_is_not_float(self) -> None:
        assert IntValue(value=1) != FloatValue(value=1.0)

    def test_scalars_are_hashable(self) -> None:
        keys = {IntValue(value=1), IntValue(value=1), StringValue(value="1")}
        assert len(keys) == 2

    def test_values_are_frozen(self) -> None:
        value = IntValue(value=1)
        with pytest.raises(ValidationError):
            value.value = 2  # type: ignore[misc]

    def test_strict_types(self) -> None:
        with pytest.raises(ValidationError):
            IntValue(value="1")  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            IntValue(value=True)

    def test_duplicate_mapping_keys_are_rejected(self) -> None:
        entry = MappingEntry(key=StringValue(value="a"), value=NullValue())
        with pytest.raises(ValidationError, match="duplicate key 'a'"):
            MappingValue(entries=(entry, entry))

    def test_collection_keys_are_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MappingEntry(key=SequenceValue(), value=NullValue())  # type: ignore[arg-type]

    def test_discriminated_round_trip_through_json(self) -> None:
        value = SequenceValue(items=(IntValue(value=1), _mapping(a=2)))
        assert SequenceValue.model_validate_json(value.model_dump_json()) == value


# ###############
# Accessors
# ###############


class TestAccessors:
    def test_is_null(self) -> None:
        assert NullValue().is_null
        assert not StringValue(value="").is_null

    @pytest.mark.parametrize(
        "value,expected",
        [
            (NullValue(), 0),
            (IntValue(value=5), 1),
            (StringValue(value="abc"), 1),
            (SequenceValue(items=(NullValue(), NullValue())), 2),
            (MappingValue(), 0),
        ],
    )
    def test_count(self, value: object, expected: int) -> None:
        assert value.count == expected  # type: ignore[attr-defined]

    def test_typed_accessors(self) -> None:
        assert StringValue(value="x").as_str == "x"
        assert StringValue(value="x").as_int is None
        assert IntValue(value=2).as_int == 2
        assert FloatValue(value=2.5).as_float == 2.5
        assert BoolValue(value=False).as_bool is False
        assert IntValue(value=1).as_bool is None

    def test_as_number_widens_integers(self) -> None:
        assert IntValue(value=2).as_number == 2.0
        assert FloatValue(value=0.5).as_number == 0.5
        assert StringValue(value="2").as_number is None

    def test_as_list_and_as_dict(self) -> None:
        sequence = SequenceValue(items=(IntValue(value=1),))
        assert sequence.as_list == [IntValue(value=1)]
        assert sequence.as_dict is None
        assert _mapping(a=1).as_dict == {StringValue(value="a"): IntValue(value=1)}

    def test_lookup_by_python_key(self) -> None:
        mapping = _mapping(a=1, b=2)
        assert mapping.lookup("b") == IntValue(value=2)
        assert mapping.lookup("missing") is None

    def test_lookup_by_value_key(self) -> None:
        mapping = MappingValue(entries=(MappingEntry(key=IntValue(value=1), value=StringValue(value="one")),))
        assert mapping.lookup(IntValue(value=1)) == StringValue(value="one")
        assert mapping.lookup(1) == StringValue(value="one")
        assert mapping.lookup(True) is None

    def test_lookup_on_non_mapping(self) -> None:
        assert SequenceValue().lookup("a") is None

    def test_at(self) -> None:
        sequence = SequenceValue(items=(IntValue(value=1), IntValue(value=2)))
        assert sequence.at(1) == IntValue(value=2)
        assert sequence.at(-1) == IntValue(value=2)
        assert sequence.at(2) is None
        assert _mapping(a=1).at(0) is None


# ###############
# Python Conversion
# ###############


class TestPythonConversion:
    def test_to_python(self) -> None:
        value = MappingValue(
            entries=(
                MappingEntry(key=StringValue(value="a"), value=SequenceValue(items=(IntValue(value=1), NullValue()))),
                MappingEntry(key=IntValue(value=2), value=BoolValue(value=True)),
            )
        )
        assert value.to_python() == {"a": [1, None], 2: True}

    def test_to_python_detects_key_collision(self) -> None:
        value = MappingValue(
            entries=(
                MappingEntry(key=BoolValue(value=True), value=NullValue()),
                MappingEntry(key=IntValue(value=1), value=NullValue()),
            )
        )
        with pytest.raises(ValueError, match="collide"):
            value.to_python()

    def test_from_python(self) -> None:
        value = from_python({"a": [1, 2.5, None, True], "b": {"c": "d"}})
        assert value.lookup("a") == SequenceValue(
            items=(IntValue(value=1), FloatValue(value=2.5), NullValue(), BoolValue(value=True))
        )
        nested = value.lookup("b")
        assert nested is not None
        assert nested.lookup("c") == StringValue(value="d")

    def test_from_python_keeps_bool_distinct_from_int(self) -> None:
        assert from_python(True) == BoolValue(value=True)
        assert from_python(1) == IntValue(value=1)

    def test_from_python_round_trip(self) -> None:
        data = {"x": [1, {"y": None}], "z": "w", "n": -3.5}
        assert from_python(data).to_python() == data

    def test_from_python_nan(self) -> None:
        value = from_python(float("nan")).as_float
        assert value is not None and math.isnan(value)

    def test_from_python_rejects_unsupported_objects(self) -> None:
        with pytest.raises(TypeError, match="cannot convert set"):
            from_python({1, 2})

    def test_from_python_rejects_collection_keys(self) -> None:
        with pytest.raises(TypeError, match="mapping keys must be scalars"):
            from_python({(1, 2): "x"})
