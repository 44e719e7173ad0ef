"""Document value model: FieldValue (tagged variant) and ObjectValue (map).

FieldValue is immutable. Each instance carries a FieldValueType and the
matching Python payload:

    NULL       None
    BOOLEAN    bool
    INTEGER    int (signed 64-bit)
    DOUBLE     float
    TIMESTAMP  Timestamp
    STRING     str
    BLOB       bytes
    ARRAY      tuple[FieldValue, ...]
    OBJECT     ObjectValue
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from firestore_codec.core.constants import INT64_MAX, INT64_MIN
from firestore_codec.domain.enums import FieldValueType
from firestore_codec.domain.value_objects.core import Timestamp


class ObjectValue(Mapping[str, "FieldValue"]):
    """Insertion-ordered, immutable mapping of non-empty string keys to FieldValues.

    Equality compares key sets and per-key values; iteration order is not
    part of equality.
    """

    __slots__ = ("_fields",)

    def __init__(
        self,
        fields: Mapping[str, FieldValue] | Iterable[tuple[str, FieldValue]] = (),
    ) -> None:
        items = fields.items() if isinstance(fields, Mapping) else fields
        result: dict[str, FieldValue] = {}
        for key, value in items:
            if not isinstance(key, str) or not key:
                raise ValueError(f"Object keys must be non-empty strings, got: {key!r}")
            if not _is_utf8(key):
                raise ValueError(f"Object keys must be valid UTF-8, got: {key!r}")
            if not isinstance(value, FieldValue):
                raise TypeError(
                    f"Object values must be FieldValue instances, got: {type(value).__name__}"
                )
            result[key] = value
        self._fields = result

    @classmethod
    def empty(cls) -> ObjectValue:
        return cls()

    def set(self, key: str, value: FieldValue) -> ObjectValue:
        """Return a copy with ``key`` set to ``value`` (appended if new)."""
        return ObjectValue({**self._fields, key: value})

    def delete(self, key: str) -> ObjectValue:
        """Return a copy without ``key``."""
        return ObjectValue((k, v) for k, v in self._fields.items() if k != key)

    def __getitem__(self, key: str) -> FieldValue:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"ObjectValue({self._fields!r})"


def _is_int64(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and INT64_MIN <= value <= INT64_MAX


def _is_utf8(value: str) -> bool:
    # Lone surrogates are valid str but have no UTF-8 encoding.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


# Payload check per type; the message names what was expected.
_PAYLOAD_CHECKS: dict[FieldValueType, tuple[Any, str]] = {
    FieldValueType.NULL: (lambda v: v is None, "None"),
    FieldValueType.BOOLEAN: (lambda v: isinstance(v, bool), "bool"),
    FieldValueType.INTEGER: (_is_int64, "signed 64-bit int"),
    FieldValueType.DOUBLE: (lambda v: isinstance(v, float), "float"),
    FieldValueType.TIMESTAMP: (lambda v: isinstance(v, Timestamp), "Timestamp"),
    FieldValueType.STRING: (lambda v: isinstance(v, str) and _is_utf8(v), "str"),
    FieldValueType.BLOB: (lambda v: isinstance(v, bytes), "bytes"),
    FieldValueType.ARRAY: (
        lambda v: isinstance(v, tuple) and all(isinstance(x, FieldValue) for x in v),
        "tuple of FieldValue",
    ),
    FieldValueType.OBJECT: (lambda v: isinstance(v, ObjectValue), "ObjectValue"),
}


@dataclass(frozen=True)
class FieldValue:
    """A single document value: a FieldValueType plus its payload.

    Prefer the named constructors (FieldValue.integer(42), ...) or
    FieldValue.from_python(); they normalize payloads (lists to tuples,
    dicts to ObjectValue) before validation.
    """

    type: FieldValueType
    value: Any = None

    def __post_init__(self) -> None:
        """Validate payload against type.

        Raises:
            TypeError: If the payload does not match the type.
            ValueError: If an integer payload is outside the signed 64-bit range,
                or a string payload cannot be encoded as UTF-8.
        """
        check, expected = _PAYLOAD_CHECKS[self.type]
        if check(self.value):
            return
        if self.type is FieldValueType.INTEGER and isinstance(self.value, int) and not isinstance(
            self.value, bool
        ):
            raise ValueError(f"Integer value out of signed 64-bit range: {self.value}")
        if self.type is FieldValueType.STRING and isinstance(self.value, str):
            raise ValueError(f"String value must be valid UTF-8, got: {self.value!r}")
        raise TypeError(
            f"{self.type.name} value must be {expected}, got: {type(self.value).__name__}"
        )

    # Constructors

    @classmethod
    def null(cls) -> FieldValue:
        return cls(FieldValueType.NULL)

    @classmethod
    def boolean(cls, value: bool) -> FieldValue:
        return cls(FieldValueType.BOOLEAN, value)

    @classmethod
    def integer(cls, value: int) -> FieldValue:
        return cls(FieldValueType.INTEGER, value)

    @classmethod
    def double(cls, value: float) -> FieldValue:
        return cls(FieldValueType.DOUBLE, float(value))

    @classmethod
    def timestamp(cls, value: Timestamp) -> FieldValue:
        return cls(FieldValueType.TIMESTAMP, value)

    @classmethod
    def string(cls, value: str) -> FieldValue:
        return cls(FieldValueType.STRING, value)

    @classmethod
    def blob(cls, value: bytes) -> FieldValue:
        return cls(FieldValueType.BLOB, bytes(value))

    @classmethod
    def array(cls, values: Iterable[FieldValue]) -> FieldValue:
        return cls(FieldValueType.ARRAY, tuple(values))

    @classmethod
    def object(
        cls,
        fields: Mapping[str, FieldValue] | Iterable[tuple[str, FieldValue]] = (),
    ) -> FieldValue:
        if isinstance(fields, ObjectValue):
            return cls(FieldValueType.OBJECT, fields)
        return cls(FieldValueType.OBJECT, ObjectValue(fields))

    @classmethod
    def from_python(cls, value: Any) -> FieldValue:
        """Convert a plain Python value (recursively) into a FieldValue.

        Raises:
            TypeError: If the value (or a nested value) has no FieldValue type.
        """
        if isinstance(value, FieldValue):
            return value
        if value is None:
            return cls.null()
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, float):
            return cls.double(value)
        if isinstance(value, Timestamp):
            return cls.timestamp(value)
        if isinstance(value, datetime):
            return cls.timestamp(Timestamp.from_datetime(value))
        if isinstance(value, str):
            return cls.string(value)
        if isinstance(value, (bytes, bytearray)):
            return cls.blob(bytes(value))
        if isinstance(value, (list, tuple)):
            return cls.array(cls.from_python(x) for x in value)
        if isinstance(value, Mapping):
            return cls.object((k, cls.from_python(v)) for k, v in value.items())
        raise TypeError(f"Unsupported document value type: {type(value)}")

    def to_python(self) -> Any:
        """Convert back to plain Python values (Timestamps stay Timestamps)."""
        if self.type is FieldValueType.ARRAY:
            return [x.to_python() for x in self.value]
        if self.type is FieldValueType.OBJECT:
            return {k: v.to_python() for k, v in self.value.items()}
        return self.value

    # Accessors

    def _expect(self, expected: FieldValueType) -> Any:
        if self.type is not expected:
            raise TypeError(f"FieldValue is {self.type.name}, not {expected.name}")
        return self.value

    @property
    def boolean_value(self) -> bool:
        return self._expect(FieldValueType.BOOLEAN)

    @property
    def integer_value(self) -> int:
        return self._expect(FieldValueType.INTEGER)

    @property
    def double_value(self) -> float:
        return self._expect(FieldValueType.DOUBLE)

    @property
    def timestamp_value(self) -> Timestamp:
        return self._expect(FieldValueType.TIMESTAMP)

    @property
    def string_value(self) -> str:
        return self._expect(FieldValueType.STRING)

    @property
    def blob_value(self) -> bytes:
        return self._expect(FieldValueType.BLOB)

    @property
    def array_value(self) -> tuple[FieldValue, ...]:
        return self._expect(FieldValueType.ARRAY)

    @property
    def object_value(self) -> ObjectValue:
        return self._expect(FieldValueType.OBJECT)

    @property
    def is_nan(self) -> bool:
        return self.type is FieldValueType.DOUBLE and math.isnan(self.value)
