"""Encode/decode FieldValues to/from the Firestore ``Value`` protobuf message.

Wire layout (google.firestore.v1):

    Value       oneof: boolean_value=1, integer_value=2, map_value=6,
                timestamp_value=10, null_value=11, string_value=17
    MapValue    repeated FieldsEntry fields = 1
    FieldsEntry string key = 1; Value value = 2
    Timestamp   int64 seconds = 1; int32 nanos = 2

Unknown field numbers are rejected rather than skipped, to keep the codec
in lock-step with the schema.
"""

from __future__ import annotations

from firestore_codec.core.constants import (
    FIELDS_ENTRY_KEY_TAG,
    FIELDS_ENTRY_VALUE_TAG,
    INT32_MAX,
    INT32_MIN,
    MAP_VALUE_FIELDS_TAG,
    NANOS_PER_SECOND,
    TIMESTAMP_MAX_SECONDS,
    TIMESTAMP_MIN_SECONDS,
    TIMESTAMP_NANOS_TAG,
    TIMESTAMP_SECONDS_TAG,
    VALUE_BOOLEAN_VALUE_TAG,
    VALUE_INTEGER_VALUE_TAG,
    VALUE_MAP_VALUE_TAG,
    VALUE_NULL_VALUE_TAG,
    VALUE_STRING_VALUE_TAG,
    VALUE_TIMESTAMP_VALUE_TAG,
)
from firestore_codec.domain.enums import FieldValueType, WireType
from firestore_codec.domain.value_objects.core import Timestamp
from firestore_codec.domain.value_objects.field_value import FieldValue, ObjectValue
from firestore_codec.infrastructure.wire.reader import Reader
from firestore_codec.infrastructure.wire.wire_format import Tag
from firestore_codec.infrastructure.wire.writer import Writer
from firestore_codec.shared.telemetry.logging import get_logger
from firestore_codec.shared.utils.assertions import hard_assert

logger = get_logger(__name__)

# Expected wire type for every Value field number we understand.
VALUE_WIRE_TYPES: dict[int, WireType] = {
    VALUE_NULL_VALUE_TAG: WireType.VARINT,
    VALUE_BOOLEAN_VALUE_TAG: WireType.VARINT,
    VALUE_INTEGER_VALUE_TAG: WireType.VARINT,
    VALUE_STRING_VALUE_TAG: WireType.STRING,
    VALUE_TIMESTAMP_VALUE_TAG: WireType.STRING,
    VALUE_MAP_VALUE_TAG: WireType.STRING,
}

_WIRE_TYPE_MISMATCH = (
    "Input proto bytes cannot be parsed (mismatch between the wiretype and the "
    "field number (tag))"
)
_FIELDS_ENTRY_TAG = Tag(WireType.STRING, MAP_VALUE_FIELDS_TAG)
_KEY_TAG = Tag(WireType.STRING, FIELDS_ENTRY_KEY_TAG)
_VALUE_TAG = Tag(WireType.STRING, FIELDS_ENTRY_VALUE_TAG)


def encode_timestamp(writer: Writer, timestamp: Timestamp) -> None:
    """Write the fields of a google.protobuf.Timestamp.

    Both fields are always emitted, zero or not.
    """
    writer.write_tag(Tag(WireType.VARINT, TIMESTAMP_SECONDS_TAG))
    writer.write_integer(timestamp.seconds)
    writer.write_tag(Tag(WireType.VARINT, TIMESTAMP_NANOS_TAG))
    writer.write_integer(timestamp.nanos)


def decode_timestamp(reader: Reader) -> Timestamp:
    """Read the fields of a google.protobuf.Timestamp and range-check them.

    Fields may appear in any order; the last occurrence wins and a missing
    field is zero.
    """
    seconds = 0
    nanos = 0
    while reader.ok and reader.bytes_left:
        tag = reader.read_tag()
        if not reader.ok:
            break
        if tag.wire_type is not WireType.VARINT or tag.field_number not in (
            TIMESTAMP_SECONDS_TAG,
            TIMESTAMP_NANOS_TAG,
        ):
            reader.fail("Input proto bytes cannot be parsed (invalid timestamp field)")
            break
        value = reader.read_integer()
        if tag.field_number == TIMESTAMP_SECONDS_TAG:
            seconds = value
        elif not INT32_MIN <= value <= INT32_MAX:
            reader.fail("Input proto bytes cannot be parsed (timestamp nanos overflow int32)")
        else:
            nanos = value
    if not reader.ok:
        return Timestamp(0)

    if seconds < TIMESTAMP_MIN_SECONDS:
        reader.fail("Invalid message: timestamp beyond the earliest supported date")
    elif seconds > TIMESTAMP_MAX_SECONDS:
        reader.fail("Invalid message: timestamp beyond the latest supported date")
    elif not 0 <= nanos < NANOS_PER_SECOND:
        reader.fail("Invalid message: timestamp nanos must be between 0 and 999999999")
    if not reader.ok:
        return Timestamp(0)
    return Timestamp(seconds, nanos)


def encode_field_value(writer: Writer, value: FieldValue) -> None:
    """Write one Value message body: a single oneof field.

    Raises:
        InternalCodecError: For value types the wire codec does not
            support (DOUBLE, BLOB, ARRAY).
    """
    value_type = value.type
    if value_type is FieldValueType.NULL:
        writer.write_tag(Tag(WireType.VARINT, VALUE_NULL_VALUE_TAG))
        writer.write_null()
    elif value_type is FieldValueType.BOOLEAN:
        writer.write_tag(Tag(WireType.VARINT, VALUE_BOOLEAN_VALUE_TAG))
        writer.write_bool(value.boolean_value)
    elif value_type is FieldValueType.INTEGER:
        writer.write_tag(Tag(WireType.VARINT, VALUE_INTEGER_VALUE_TAG))
        writer.write_integer(value.integer_value)
    elif value_type is FieldValueType.STRING:
        writer.write_tag(Tag(WireType.STRING, VALUE_STRING_VALUE_TAG))
        writer.write_string(value.string_value)
    elif value_type is FieldValueType.TIMESTAMP:
        timestamp = value.timestamp_value
        writer.write_tag(Tag(WireType.STRING, VALUE_TIMESTAMP_VALUE_TAG))
        writer.write_nested_message(lambda w: encode_timestamp(w, timestamp))
    elif value_type is FieldValueType.OBJECT:
        writer.write_tag(Tag(WireType.STRING, VALUE_MAP_VALUE_TAG))
        encode_object(writer, value.object_value)
    else:
        hard_assert(False, "Unhandled field value type for protobuf encoding: %s", value_type.name)


def decode_field_value(reader: Reader) -> FieldValue:
    """Read one Value message body: exactly one tag and its payload.

    On failure the reader's status is set to DATA_LOSS and a null value is
    returned as the zero value.

    Raises:
        InternalCodecError: Only for an unknown field number when the
            reader was created with abort_on_unknown_field.
    """
    tag = reader.read_tag()
    if not reader.ok:
        return FieldValue.null()

    expected = VALUE_WIRE_TYPES.get(tag.field_number)
    if expected is None:
        logger.warning("Unknown Value field number (tag): %d", tag.field_number)
        hard_assert(
            not reader.abort_on_unknown_field,
            "Unhandled message field number (tag): %d. (Or possibly corrupt input bytes)",
            tag.field_number,
        )
        reader.fail("Input proto bytes cannot be parsed (invalid field number (tag))")
        return FieldValue.null()
    if tag.wire_type is not expected:
        reader.fail(_WIRE_TYPE_MISMATCH)
        return FieldValue.null()

    field_number = tag.field_number
    if field_number == VALUE_NULL_VALUE_TAG:
        reader.read_null()
        result = FieldValue.null()
    elif field_number == VALUE_BOOLEAN_VALUE_TAG:
        result = FieldValue.boolean(reader.read_bool())
    elif field_number == VALUE_INTEGER_VALUE_TAG:
        result = FieldValue.integer(reader.read_integer())
    elif field_number == VALUE_STRING_VALUE_TAG:
        result = FieldValue.string(reader.read_string())
    elif field_number == VALUE_TIMESTAMP_VALUE_TAG:
        result = FieldValue.timestamp(reader.read_nested_message(decode_timestamp, Timestamp(0)))
    else:
        result = FieldValue.object(decode_object(reader))
    return result if reader.ok else FieldValue.null()


def encode_fields_entry(writer: Writer, key: str, value: FieldValue) -> None:
    """Write a MapValue.FieldsEntry body: key string, then nested Value."""
    writer.write_tag(_KEY_TAG)
    writer.write_string(key)
    writer.write_tag(_VALUE_TAG)
    writer.write_nested_message(lambda w: encode_field_value(w, value))


def decode_fields_entry(reader: Reader) -> tuple[str, FieldValue]:
    """Read a MapValue.FieldsEntry body: exactly one key then one value."""
    empty = ("", FieldValue.null())

    tag = reader.read_tag()
    if not reader.ok:
        return empty
    if tag != _KEY_TAG:
        reader.fail("Input proto bytes cannot be parsed (expected map entry key)")
        return empty
    key = reader.read_string()
    if not reader.ok:
        return empty
    if not key:
        reader.fail("Input proto bytes cannot be parsed (empty map key)")
        return empty

    tag = reader.read_tag()
    if not reader.ok:
        return empty
    if tag != _VALUE_TAG:
        reader.fail("Input proto bytes cannot be parsed (expected map entry value)")
        return empty
    value = reader.read_nested_message(decode_field_value, FieldValue.null())
    if not reader.ok:
        return empty
    return key, value


def encode_object(writer: Writer, obj: ObjectValue) -> None:
    """Write a length-prefixed MapValue, entries in the object's iteration order."""

    def write_map_value(w: Writer) -> None:
        for key, value in obj.items():
            w.write_tag(_FIELDS_ENTRY_TAG)
            w.write_nested_message(lambda entry_writer: encode_fields_entry(entry_writer, key, value))

    writer.write_nested_message(write_map_value)


def _read_map_value(reader: Reader) -> ObjectValue:
    fields: dict[str, FieldValue] = {}
    while reader.ok and reader.bytes_left:
        tag = reader.read_tag()
        if not reader.ok:
            break
        if tag != _FIELDS_ENTRY_TAG:
            reader.fail("Input proto bytes cannot be parsed (expected map fields entry)")
            break
        key, value = reader.read_nested_message(decode_fields_entry, ("", FieldValue.null()))
        if not reader.ok:
            break
        if key in fields:
            reader.fail(f"Input proto bytes cannot be parsed (duplicate map key {key!r})")
            break
        fields[key] = value
    if not reader.ok:
        return ObjectValue.empty()
    return ObjectValue(fields)


def decode_object(reader: Reader) -> ObjectValue:
    """Read a length-prefixed MapValue; duplicate keys are DATA_LOSS."""
    if not reader.ok:
        return ObjectValue.empty()
    return reader.read_nested_message(_read_map_value, ObjectValue.empty())
