"""Serializer: converts between the document value model and Firestore bytes.

Holds a single immutable DatabaseId (plus settings); every call builds a
fresh Writer or Reader, so one instance can be shared across threads as
long as callers do not share output buffers.
"""

from __future__ import annotations

from firestore_codec.core.config import Settings, get_settings
from firestore_codec.domain.exceptions import DataLossException
from firestore_codec.domain.value_objects.core import DatabaseId, DocumentKey
from firestore_codec.domain.value_objects.field_value import FieldValue
from firestore_codec.domain.value_objects.status import Status
from firestore_codec.infrastructure.firebase import key_codec, value_codec
from firestore_codec.infrastructure.wire.reader import Reader
from firestore_codec.infrastructure.wire.writer import Writer
from firestore_codec.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class Serializer:
    """Encodes/decodes FieldValues and DocumentKeys for one database."""

    def __init__(self, database_id: DatabaseId, settings: Settings | None = None) -> None:
        self.database_id = database_id
        self.settings = settings or get_settings()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Serializer:
        """Build a Serializer for the database named in configuration.

        Raises:
            ValueError: If FIRESTORE_CODEC_PROJECT_ID is not set.
        """
        settings = settings or get_settings()
        if not settings.project_id:
            raise ValueError(
                "FIRESTORE_CODEC_PROJECT_ID is required to build a Serializer from settings."
            )
        return cls(DatabaseId(settings.project_id, settings.database_id), settings)

    # Values

    def encode_field_value(self, field_value: FieldValue, out_bytes: bytearray) -> Status:
        """Append the wire form of ``field_value`` to ``out_bytes``.

        Returns:
            The writer's final status (always OK for supported values).

        Raises:
            InternalCodecError: For value types the wire codec does not
                support, output beyond max_document_size, or nesting
                deeper than max_nesting_depth.
        """
        writer = Writer.wrap(
            out_bytes,
            self.settings.max_document_size,
            max_depth=self.settings.max_nesting_depth,
        )
        value_codec.encode_field_value(writer, field_value)
        return writer.status

    def encode_field_value_to_bytes(self, field_value: FieldValue) -> bytes:
        """Return the wire form of ``field_value`` as bytes."""
        out = bytearray()
        self.encode_field_value(field_value, out).raise_for_status()
        return bytes(out)

    def encoded_size(self, field_value: FieldValue) -> int:
        """Return how many bytes encode_field_value would write, without writing them."""
        writer = Writer.sizing(max_depth=self.settings.max_nesting_depth)
        value_codec.encode_field_value(writer, field_value)
        return writer.bytes_written

    def try_decode_field_value(self, data: bytes | bytearray | memoryview) -> FieldValue | Status:
        """Decode exactly one top-level value; return a non-OK Status on bad input."""
        reader = Reader.wrap(
            data,
            max_depth=self.settings.max_nesting_depth,
            abort_on_unknown_field=self.settings.abort_on_unknown_field,
        )
        field_value = value_codec.decode_field_value(reader)
        if reader.ok and reader.bytes_left:
            reader.fail(
                f"Input proto bytes cannot be parsed ({reader.bytes_left} trailing bytes "
                "after the value)"
            )
        if reader.ok:
            return field_value
        logger.debug("Rejected %d input bytes: %s", len(data), reader.status)
        return reader.status

    def decode_field_value(self, data: bytes | bytearray | memoryview) -> FieldValue:
        """Decode exactly one top-level value.

        Raises:
            DataLossException: If the bytes are malformed, truncated, out of
                range, or followed by trailing bytes.
        """
        result = self.try_decode_field_value(data)
        if isinstance(result, Status):
            raise DataLossException(result.message, {"code": result.code.value})
        return result

    # Keys

    def encode_key(self, key: DocumentKey) -> str:
        return key_codec.encode_key(self.database_id, key)

    def decode_key(self, name: str) -> DocumentKey:
        """Decode a resource name of this serializer's database.

        Raises:
            InternalCodecError: If the name is malformed or names another
                project or database.
        """
        return key_codec.decode_key(self.database_id, name)
