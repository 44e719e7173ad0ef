"""Protobuf wire layer: byte streams, wire format, Writer and Reader."""

from firestore_codec.infrastructure.wire.byte_streams import ByteSink, ByteSource
from firestore_codec.infrastructure.wire.reader import Reader
from firestore_codec.infrastructure.wire.wire_format import Tag
from firestore_codec.infrastructure.wire.writer import Writer

__all__ = [
    "ByteSink",
    "ByteSource",
    "Reader",
    "Tag",
    "Writer",
]
