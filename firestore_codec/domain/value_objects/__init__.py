"""Domain value objects and shared value types."""

from firestore_codec.domain.value_objects.core import (
    DatabaseId,
    DocumentKey,
    ResourcePath,
    Timestamp,
)
from firestore_codec.domain.value_objects.field_value import FieldValue, ObjectValue
from firestore_codec.domain.value_objects.status import Status

__all__ = [
    "DatabaseId",
    "DocumentKey",
    "ResourcePath",
    "Timestamp",
    "FieldValue",
    "ObjectValue",
    "Status",
]
