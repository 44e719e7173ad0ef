"""Firestore document value codec.

Translates between the document value model (FieldValue, ObjectValue) and
the Firestore wire forms, and between DocumentKeys and resource names.

Example:
    from firestore_codec import DatabaseId, FieldValue, Serializer

    serializer = Serializer(DatabaseId("my-project"))
    data = serializer.encode_field_value_to_bytes(FieldValue.integer(42))
    assert serializer.decode_field_value(data) == FieldValue.integer(42)
"""

from firestore_codec.application.services.serializer import Serializer
from firestore_codec.domain import (
    CodecException,
    DatabaseId,
    DataLossException,
    DocumentKey,
    ErrorCode,
    FieldValue,
    FieldValueType,
    InternalCodecError,
    ObjectValue,
    ResourcePath,
    Status,
    Timestamp,
)

__all__ = [
    "Serializer",
    "CodecException",
    "DatabaseId",
    "DataLossException",
    "DocumentKey",
    "ErrorCode",
    "FieldValue",
    "FieldValueType",
    "InternalCodecError",
    "ObjectValue",
    "ResourcePath",
    "Status",
    "Timestamp",
]
