"""Protobuf wire format: varints, tags, and two's-complement helpers.

Signed integers are the raw 64-bit two's complement in a varint (int64),
not zig-zag (sint64); that is what the Firestore schema uses.
"""

from __future__ import annotations

from dataclasses import dataclass

from firestore_codec.core.constants import MAX_VARINT_BYTES, UINT64_MASK
from firestore_codec.domain.enums import WireType
from firestore_codec.domain.exceptions import DataLossException
from firestore_codec.infrastructure.wire.byte_streams import ByteSource

TAG_TYPE_BITS = 3
_TAG_TYPE_MASK = (1 << TAG_TYPE_BITS) - 1


@dataclass(frozen=True)
class Tag:
    """(wire_type, field_number) pair framing each field on the wire."""

    wire_type: WireType = WireType.VARINT
    field_number: int = 0


def to_unsigned64(value: int) -> int:
    """Reinterpret a signed 64-bit integer as unsigned (two's complement)."""
    return value & UINT64_MASK


def to_signed64(value: int) -> int:
    """Reinterpret an unsigned 64-bit integer as signed (two's complement)."""
    value &= UINT64_MASK
    return value - (1 << 64) if value >> 63 else value


def encode_varint(value: int) -> bytes:
    """Encode an integer as an unsigned LEB128 varint.

    Negative values are written as their 64-bit two's complement, which
    always takes ten bytes.

    Raises:
        ValueError: If value does not fit in 64 bits.
    """
    if value < 0:
        value = to_unsigned64(value)
    elif value > UINT64_MASK:
        raise ValueError(f"varint value too large: {value}")
    result = bytearray()
    while value > 0x7F:
        result.append((value & 0x7F) | 0x80)
        value >>= 7
    result.append(value)
    return bytes(result)


def make_tag(field_number: int, wire_type: WireType) -> int:
    return (field_number << TAG_TYPE_BITS) | int(wire_type)


def encode_tag(tag: Tag) -> bytes:
    return encode_varint(make_tag(tag.field_number, tag.wire_type))


def read_varint(source: ByteSource) -> int:
    """Read an unsigned varint of at most 64 bits.

    Raises:
        DataLossException: On truncation, more than ten bytes, or a value
            wider than 64 bits.
    """
    result = 0
    for index in range(MAX_VARINT_BYTES):
        byte = source.read_byte()
        result |= (byte & 0x7F) << (7 * index)
        if not byte & 0x80:
            if result > UINT64_MASK:
                raise DataLossException("varint overflow", {"value_bits": result.bit_length()})
            return result
    raise DataLossException("varint overflow", {"max_bytes": MAX_VARINT_BYTES})


def read_tag(source: ByteSource) -> Tag:
    """Read a field tag.

    Raises:
        DataLossException: On EOF, a zero field number, or an invalid wire type.
    """
    raw = read_varint(source)
    field_number = raw >> TAG_TYPE_BITS
    wire_type = raw & _TAG_TYPE_MASK
    if field_number == 0:
        raise DataLossException("invalid field number 0", {"tag": raw})
    try:
        return Tag(WireType(wire_type), field_number)
    except ValueError:
        raise DataLossException(
            f"invalid wire_type: {wire_type}", {"field_number": field_number}
        ) from None
