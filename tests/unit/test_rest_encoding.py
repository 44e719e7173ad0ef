"""Tests for the REST JSON Value mapping."""

import math

import pytest

from firestore_codec.domain.exceptions import DataLossException
from firestore_codec.domain.value_objects.core import Timestamp
from firestore_codec.domain.value_objects.field_value import FieldValue, ObjectValue
from firestore_codec.infrastructure.firebase._rest_encoding import (
    decode_document,
    decode_value,
    encode_document,
    encode_value,
)


class TestEncodeValue:
    """Every FieldValueType has a JSON form."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (FieldValue.null(), {"nullValue": None}),
            (FieldValue.boolean(True), {"booleanValue": True}),
            (FieldValue.integer(-(2**63)), {"integerValue": "-9223372036854775808"}),
            (FieldValue.double(1.5), {"doubleValue": 1.5}),
            (FieldValue.double(math.inf), {"doubleValue": "Infinity"}),
            (FieldValue.double(math.nan), {"doubleValue": "NaN"}),
            (
                FieldValue.timestamp(Timestamp(1, 500_000_000)),
                {"timestampValue": "1970-01-01T00:00:01.500Z"},
            ),
            (
                FieldValue.timestamp(Timestamp(-62135596800)),
                {"timestampValue": "0001-01-01T00:00:00Z"},
            ),
            (FieldValue.string("s"), {"stringValue": "s"}),
            (FieldValue.blob(b"\x00\xff"), {"bytesValue": "AP8="}),
            (
                FieldValue.array([FieldValue.integer(1)]),
                {"arrayValue": {"values": [{"integerValue": "1"}]}},
            ),
            (
                FieldValue.object({"a": FieldValue.null()}),
                {"mapValue": {"fields": {"a": {"nullValue": None}}}},
            ),
        ],
    )
    def test_encode(self, value: FieldValue, expected: dict) -> None:
        assert encode_value(value) == expected

    def test_encode_document(self) -> None:
        data = ObjectValue({"n": FieldValue.integer(3)})
        assert encode_document(data) == {"fields": {"n": {"integerValue": "3"}}}


class TestDecodeValue:
    """JSON values decode back; malformed JSON is DATA_LOSS."""

    def test_round_trip(self) -> None:
        value = FieldValue.from_python(
            {
                "s": "x",
                "i": 7,
                "d": -0.25,
                "b": b"bytes",
                "t": Timestamp(1_700_000_000, 123_456_789),
                "a": [None, True, {"k": "v"}],
            }
        )
        assert decode_value(encode_value(value)) == value

    def test_special_doubles(self) -> None:
        assert decode_value({"doubleValue": "NaN"}).is_nan
        assert decode_value({"doubleValue": "-Infinity"}).double_value == -math.inf

    def test_integer_from_number(self) -> None:
        assert decode_value({"integerValue": 5}) == FieldValue.integer(5)

    def test_timestamp_with_offset(self) -> None:
        value = decode_value({"timestampValue": "1970-01-01T02:00:01+02:00"})
        assert value == FieldValue.timestamp(Timestamp(1, 0))

    def test_null_enum_name(self) -> None:
        assert decode_value({"nullValue": "NULL_VALUE"}) == FieldValue.null()

    def test_empty_containers(self) -> None:
        assert decode_value({"arrayValue": {}}) == FieldValue.array([])
        assert decode_value({"mapValue": {}}) == FieldValue.object()

    @pytest.mark.parametrize(
        "obj",
        [
            {},
            {"nullValue": None, "booleanValue": True},
            {"booleanValue": "yes"},
            {"integerValue": "9223372036854775808"},
            {"integerValue": "abc"},
            {"integerValue": "1_000"},
            {"integerValue": " 5"},
            {"integerValue": "5\n"},
            {"integerValue": "+5"},
            {"integerValue": "\u0663"},
            {"doubleValue": "1.5"},
            {"doubleValue": 10**400},
            {"timestampValue": "yesterday"},
            {"timestampValue": "10000-01-01T00:00:00Z"},
            {"bytesValue": "abc"},
            {"stringValue": 3},
            {"stringValue": "\ud800"},
            {"arrayValue": {"values": "x"}},
            {"mapValue": {"fields": {"": {"nullValue": None}}}},
            {"mapValue": {"fields": {"\udfff": {"nullValue": None}}}},
            {"referenceValue": "projects/p"},
            ["nullValue"],
        ],
    )
    def test_malformed(self, obj: object) -> None:
        with pytest.raises(DataLossException):
            decode_value(obj)


class TestDecodeDocument:
    """Documents are {"fields": {...}}; a missing document is empty."""

    def test_missing(self) -> None:
        assert decode_document(None) == ObjectValue.empty()
        assert decode_document({}) == ObjectValue.empty()

    def test_fields(self) -> None:
        doc = {"name": "ignored", "fields": {"a": {"stringValue": "b"}}}
        assert decode_document(doc) == ObjectValue({"a": FieldValue.string("b")})

    @pytest.mark.parametrize("doc", [["x"], "x", 3, {"fields": ["x"]}])
    def test_not_an_object(self, doc: object) -> None:
        with pytest.raises(DataLossException):
            decode_document(doc)
