"""Firestore codecs: protobuf Value, resource names, and REST JSON."""

from firestore_codec.infrastructure.firebase._rest_encoding import (
    decode_document,
    decode_value,
    encode_document,
    encode_value,
)
from firestore_codec.infrastructure.firebase.key_codec import decode_key, encode_key
from firestore_codec.infrastructure.firebase.value_codec import (
    decode_field_value,
    encode_field_value,
)

__all__ = [
    "decode_document",
    "decode_value",
    "encode_document",
    "encode_value",
    "decode_key",
    "encode_key",
    "decode_field_value",
    "encode_field_value",
]
