"""Encode/decode FieldValues to/from the Firestore REST API JSON ``Value`` format.

Same message as the protobuf codec, in its proto3 JSON mapping
(``{"integerValue": "42"}``, ``{"mapValue": {"fields": {...}}}``). Unlike
the wire codec this mapping covers every FieldValueType.
"""

import base64
import binascii
import math
import re
from typing import Any

from firestore_codec.domain.enums import FieldValueType
from firestore_codec.domain.exceptions import DataLossException
from firestore_codec.domain.value_objects.core import Timestamp
from firestore_codec.domain.value_objects.field_value import FieldValue, ObjectValue
from firestore_codec.shared.utils.datetime import format_rfc3339, parse_rfc3339

_SPECIAL_DOUBLES = {"NaN": math.nan, "Infinity": math.inf, "-Infinity": -math.inf}
_INTEGER_RE = re.compile(r"-?[0-9]+")


def _encode_double(v: float) -> float | str:
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "Infinity" if v > 0 else "-Infinity"
    return v


def encode_value(v: FieldValue) -> dict:
    """Convert a FieldValue to a REST ``Value`` dict."""
    t = v.type
    if t is FieldValueType.NULL:
        return {"nullValue": None}
    if t is FieldValueType.BOOLEAN:
        return {"booleanValue": v.value}
    if t is FieldValueType.INTEGER:
        return {"integerValue": str(v.value)}
    if t is FieldValueType.DOUBLE:
        return {"doubleValue": _encode_double(v.value)}
    if t is FieldValueType.TIMESTAMP:
        return {"timestampValue": format_rfc3339(v.value.seconds, v.value.nanos)}
    if t is FieldValueType.STRING:
        return {"stringValue": v.value}
    if t is FieldValueType.BLOB:
        return {"bytesValue": base64.standard_b64encode(v.value).decode("ascii")}
    if t is FieldValueType.ARRAY:
        return {"arrayValue": {"values": [encode_value(x) for x in v.value]}}
    return {"mapValue": {"fields": {k: encode_value(x) for k, x in v.value.items()}}}


def encode_document(data: ObjectValue) -> dict:
    """Convert an ObjectValue to REST Document ``{"fields": ...}`` format."""
    return {"fields": {k: encode_value(v) for k, v in data.items()}}


def _decode_integer(raw: Any) -> FieldValue:
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise DataLossException("integerValue must be a decimal string", {"value": raw})
    if isinstance(raw, str) and not _INTEGER_RE.fullmatch(raw):
        raise DataLossException("integerValue must be a decimal string", {"value": raw})
    try:
        return FieldValue.integer(int(raw))
    except ValueError as exc:
        raise DataLossException(f"Invalid integerValue: {exc}", {"value": raw}) from exc


def _decode_double(raw: Any) -> FieldValue:
    if isinstance(raw, str) and raw in _SPECIAL_DOUBLES:
        return FieldValue.double(_SPECIAL_DOUBLES[raw])
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise DataLossException("doubleValue must be a number", {"value": raw})
    try:
        return FieldValue.double(float(raw))
    except OverflowError as exc:
        raise DataLossException(f"Invalid doubleValue: {exc}", {"value": raw}) from exc


def _decode_timestamp(raw: Any) -> FieldValue:
    if not isinstance(raw, str):
        raise DataLossException("timestampValue must be a string", {"value": raw})
    try:
        seconds, nanos = parse_rfc3339(raw)
        return FieldValue.timestamp(Timestamp(seconds, nanos))
    except ValueError as exc:
        raise DataLossException(f"Invalid timestampValue: {exc}", {"value": raw}) from exc


def _decode_bytes(raw: Any) -> FieldValue:
    if not isinstance(raw, str):
        raise DataLossException("bytesValue must be a base64 string", {"value": raw})
    try:
        return FieldValue.blob(base64.standard_b64decode(raw.encode("ascii")))
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise DataLossException(f"Invalid bytesValue: {exc}", {"value": raw}) from exc


def _decode_fields(fields: Any) -> ObjectValue:
    if fields is None:
        return ObjectValue.empty()
    if not isinstance(fields, dict):
        raise DataLossException("fields must be an object", {"value": fields})
    for key in fields:
        if not key:
            raise DataLossException("Map keys must be non-empty")
    try:
        return ObjectValue((k, decode_value(x)) for k, x in fields.items())
    except ValueError as exc:
        raise DataLossException(f"Invalid map key: {exc}") from exc


def decode_value(obj: Any) -> FieldValue:
    """Convert a REST ``Value`` dict to a FieldValue.

    Raises:
        DataLossException: If the dict is not exactly one well-formed value.
    """
    if not isinstance(obj, dict) or len(obj) != 1:
        raise DataLossException("Value must be an object with exactly one field", {"value": obj})
    (kind, raw), = obj.items()
    if kind == "nullValue":
        if raw not in (None, "NULL_VALUE"):
            raise DataLossException("Invalid nullValue", {"value": raw})
        return FieldValue.null()
    if kind == "booleanValue":
        if not isinstance(raw, bool):
            raise DataLossException("booleanValue must be a boolean", {"value": raw})
        return FieldValue.boolean(raw)
    if kind == "integerValue":
        return _decode_integer(raw)
    if kind == "doubleValue":
        return _decode_double(raw)
    if kind == "timestampValue":
        return _decode_timestamp(raw)
    if kind == "stringValue":
        if not isinstance(raw, str):
            raise DataLossException("stringValue must be a string", {"value": raw})
        try:
            return FieldValue.string(raw)
        except ValueError as exc:
            raise DataLossException(f"Invalid stringValue: {exc}") from exc
    if kind == "bytesValue":
        return _decode_bytes(raw)
    if kind == "arrayValue":
        if raw is not None and not isinstance(raw, dict):
            raise DataLossException("arrayValue must be an object", {"value": raw})
        values = (raw or {}).get("values") or []
        if not isinstance(values, list):
            raise DataLossException("arrayValue.values must be a list", {"value": values})
        return FieldValue.array(decode_value(x) for x in values)
    if kind == "mapValue":
        if raw is not None and not isinstance(raw, dict):
            raise DataLossException("mapValue must be an object", {"value": raw})
        return FieldValue.object(_decode_fields((raw or {}).get("fields")))
    raise DataLossException(f"Unknown value kind: {kind!r}", {"kind": kind})


def decode_document(doc: dict | None) -> ObjectValue:
    """Convert a REST Document (or its absence) to an ObjectValue.

    Raises:
        DataLossException: If the document is not an object.
    """
    if doc is None:
        return ObjectValue.empty()
    if not isinstance(doc, dict):
        raise DataLossException("Document must be an object", {"value": doc})
    return _decode_fields(doc.get("fields"))
