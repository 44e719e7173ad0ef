"""Domain enumerations for the codec.

Enums represent fixed sets of domain values (value types, wire types,
status codes).
"""

from enum import Enum, IntEnum


class FieldValueType(str, Enum):
    """Kind of payload a FieldValue carries.

    The value model is wider than the protobuf codec: DOUBLE, BLOB and
    ARRAY exist in the model (and in the REST mapping) but the wire codec
    refuses to encode them.
    """

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DOUBLE = "double"
    TIMESTAMP = "timestamp"
    STRING = "string"
    BLOB = "blob"
    ARRAY = "array"
    OBJECT = "object"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid type values as strings.

        Returns:
            List of enum value strings (e.g. for validation or logging).
        """
        return [value_type.value for value_type in cls]


class WireType(IntEnum):
    """Protobuf wire type: the low three bits of a tag."""

    VARINT = 0
    FIXED64 = 1
    STRING = 2
    START_GROUP = 3
    END_GROUP = 4
    FIXED32 = 5


class ErrorCode(str, Enum):
    """Status codes surfaced by the codec."""

    OK = "OK"
    DATA_LOSS = "DATA_LOSS"
    INTERNAL = "INTERNAL"
