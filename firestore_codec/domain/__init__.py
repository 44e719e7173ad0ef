"""Domain layer: value model, enums, and exceptions.

No dependencies on infrastructure. Used by application and
infrastructure layers.
"""

from firestore_codec.domain.enums import ErrorCode, FieldValueType, WireType
from firestore_codec.domain.exceptions import (
    CodecException,
    DataLossException,
    InternalCodecError,
)
from firestore_codec.domain.value_objects import (
    DatabaseId,
    DocumentKey,
    FieldValue,
    ObjectValue,
    ResourcePath,
    Status,
    Timestamp,
)

__all__ = [
    # Enums
    "ErrorCode",
    "FieldValueType",
    "WireType",
    # Exceptions
    "CodecException",
    "DataLossException",
    "InternalCodecError",
    # Value objects
    "DatabaseId",
    "DocumentKey",
    "FieldValue",
    "ObjectValue",
    "ResourcePath",
    "Status",
    "Timestamp",
]
