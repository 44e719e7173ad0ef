"""Tests for the document value model (FieldValue, ObjectValue)."""

import math
from datetime import UTC, datetime

import pytest

from firestore_codec.domain.enums import FieldValueType
from firestore_codec.domain.value_objects.core import Timestamp
from firestore_codec.domain.value_objects.field_value import FieldValue, ObjectValue


class TestFieldValueConstructors:
    """Named constructors set the type and validate the payload."""

    def test_types(self) -> None:
        assert FieldValue.null().type is FieldValueType.NULL
        assert FieldValue.boolean(True).type is FieldValueType.BOOLEAN
        assert FieldValue.integer(1).type is FieldValueType.INTEGER
        assert FieldValue.double(1).type is FieldValueType.DOUBLE
        assert FieldValue.timestamp(Timestamp(1)).type is FieldValueType.TIMESTAMP
        assert FieldValue.string("s").type is FieldValueType.STRING
        assert FieldValue.blob(b"\x00").type is FieldValueType.BLOB
        assert FieldValue.array([]).type is FieldValueType.ARRAY
        assert FieldValue.object().type is FieldValueType.OBJECT

    def test_type_values(self) -> None:
        assert len(FieldValueType.values()) == 9
        assert "timestamp" in FieldValueType.values()

    def test_integer_range(self) -> None:
        FieldValue.integer(2**63 - 1)
        FieldValue.integer(-(2**63))
        with pytest.raises(ValueError, match="64-bit"):
            FieldValue.integer(2**63)
        with pytest.raises(ValueError, match="64-bit"):
            FieldValue.integer(-(2**63) - 1)

    def test_bool_is_not_integer(self) -> None:
        with pytest.raises(TypeError, match="INTEGER"):
            FieldValue(FieldValueType.INTEGER, True)

    def test_payload_mismatch_rejected(self) -> None:
        with pytest.raises(TypeError, match="STRING value must be str"):
            FieldValue(FieldValueType.STRING, 1)
        with pytest.raises(TypeError, match="BOOLEAN"):
            FieldValue(FieldValueType.BOOLEAN, 0)

    def test_lone_surrogate_string_rejected(self) -> None:
        with pytest.raises(ValueError, match="valid UTF-8"):
            FieldValue.string("\ud800")
        with pytest.raises(ValueError, match="valid UTF-8"):
            FieldValue.from_python("a\udfffb")

    def test_array_is_tuple(self) -> None:
        value = FieldValue.array([FieldValue.integer(1)])
        assert value.array_value == (FieldValue.integer(1),)


class TestFieldValueEquality:
    """Equality is by type and payload."""

    def test_same_payload_different_type(self) -> None:
        assert FieldValue.integer(1) != FieldValue.boolean(True)
        assert FieldValue.integer(1) != FieldValue.double(1.0)

    def test_equal_values(self) -> None:
        assert FieldValue.string("a") == FieldValue.string("a")
        assert FieldValue.timestamp(Timestamp(1, 2)) == FieldValue.timestamp(Timestamp(1, 2))

    def test_scalar_values_hashable(self) -> None:
        assert len({FieldValue.integer(1), FieldValue.integer(1), FieldValue.null()}) == 2


class TestFieldValueAccessors:
    """Typed accessors return the payload or raise TypeError."""

    def test_accessor_matches(self) -> None:
        assert FieldValue.integer(7).integer_value == 7
        assert FieldValue.string("s").string_value == "s"
        assert FieldValue.boolean(False).boolean_value is False

    def test_accessor_mismatch(self) -> None:
        with pytest.raises(TypeError, match="INTEGER, not STRING"):
            FieldValue.integer(7).string_value

    def test_is_nan(self) -> None:
        assert FieldValue.double(math.nan).is_nan is True
        assert FieldValue.double(1.0).is_nan is False


class TestFromPython:
    """from_python converts plain values recursively; to_python reverses it."""

    def test_scalars(self) -> None:
        assert FieldValue.from_python(None) == FieldValue.null()
        assert FieldValue.from_python(True) == FieldValue.boolean(True)
        assert FieldValue.from_python(3) == FieldValue.integer(3)
        assert FieldValue.from_python(1.5) == FieldValue.double(1.5)
        assert FieldValue.from_python("x") == FieldValue.string("x")
        assert FieldValue.from_python(bytearray(b"ab")) == FieldValue.blob(b"ab")

    def test_datetime(self) -> None:
        dt = datetime(2020, 5, 1, tzinfo=UTC)
        assert FieldValue.from_python(dt) == FieldValue.timestamp(Timestamp.from_datetime(dt))

    def test_nested(self) -> None:
        value = FieldValue.from_python({"a": [1, {"b": None}]})
        assert value.object_value["a"].array_value[1].object_value["b"] == FieldValue.null()
        assert value.to_python() == {"a": [1, {"b": None}]}

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError, match="Unsupported"):
            FieldValue.from_python(object())

    def test_field_value_passes_through(self) -> None:
        value = FieldValue.integer(1)
        assert FieldValue.from_python(value) is value


class TestObjectValue:
    """ObjectValue: ordered, immutable, order-free equality, non-empty keys."""

    def test_insertion_order_preserved(self) -> None:
        obj = ObjectValue([("b", FieldValue.null()), ("a", FieldValue.null())])
        assert list(obj) == ["b", "a"]

    def test_equality_ignores_order(self) -> None:
        first = ObjectValue([("a", FieldValue.integer(1)), ("b", FieldValue.integer(2))])
        second = ObjectValue([("b", FieldValue.integer(2)), ("a", FieldValue.integer(1))])
        assert first == second
        assert first != ObjectValue([("a", FieldValue.integer(1))])

    def test_empty_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            ObjectValue({"": FieldValue.null()})

    def test_lone_surrogate_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="valid UTF-8"):
            ObjectValue({"\ud800": FieldValue.null()})

    def test_non_field_value_rejected(self) -> None:
        with pytest.raises(TypeError, match="FieldValue"):
            ObjectValue({"a": 1})

    def test_set_and_delete_return_copies(self) -> None:
        obj = ObjectValue({"a": FieldValue.integer(1)})
        updated = obj.set("b", FieldValue.integer(2))
        assert list(updated) == ["a", "b"]
        assert "b" not in obj
        assert "a" not in updated.delete("a")
        assert len(obj) == 1
