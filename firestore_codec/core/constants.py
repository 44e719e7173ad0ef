"""Core constants: wire field numbers, limits, and resource-name segments.

Single source of truth for the numeric tags of the Firestore ``Value``,
``MapValue`` and ``google.protobuf.Timestamp`` messages. Values must match
the service's schema; they are not ours to choose.
"""

# google.firestore.v1.Value oneof field numbers
VALUE_BOOLEAN_VALUE_TAG = 1
VALUE_INTEGER_VALUE_TAG = 2
VALUE_MAP_VALUE_TAG = 6
VALUE_TIMESTAMP_VALUE_TAG = 10
VALUE_NULL_VALUE_TAG = 11
VALUE_STRING_VALUE_TAG = 17

# google.firestore.v1.MapValue and its FieldsEntry
MAP_VALUE_FIELDS_TAG = 1
FIELDS_ENTRY_KEY_TAG = 1
FIELDS_ENTRY_VALUE_TAG = 2

# google.protobuf.Timestamp
TIMESTAMP_SECONDS_TAG = 1
TIMESTAMP_NANOS_TAG = 2

# google.protobuf.NullValue.NULL_VALUE
NULL_VALUE = 0

# Document size limit enforced by the service (1 MiB minus 4 bytes).
MAX_DOCUMENT_SIZE = 1 * 1024 * 1024 - 4

# Nested length-delimited messages allowed below a top-level value, on both
# encode and decode. Each map level costs three (MapValue, FieldsEntry, Value).
MAX_NESTING_DEPTH = 100

# A 64-bit varint never needs more than ten bytes.
MAX_VARINT_BYTES = 10

UINT64_MASK = 0xFFFF_FFFF_FFFF_FFFF
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

# Timestamp range supported by the service: 0001-01-01T00:00:00Z through
# 9999-12-31T23:59:59.999999999Z.
TIMESTAMP_MIN_SECONDS = -62135596800
TIMESTAMP_MAX_SECONDS = 253402300799
NANOS_PER_SECOND = 1_000_000_000

# Resource-name segments: projects/{p}/databases/{d}/documents/{path}
RESOURCE_PROJECTS = "projects"
RESOURCE_DATABASES = "databases"
RESOURCE_DOCUMENTS = "documents"
DEFAULT_DATABASE_ID = "(default)"
