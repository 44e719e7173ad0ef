"""Shared utilities: assertions, datetime."""

from firestore_codec.shared.utils.assertions import hard_assert
from firestore_codec.shared.utils.datetime import (
    datetime_from_epoch,
    ensure_utc,
    format_rfc3339,
    parse_rfc3339,
    utc_now,
)

__all__ = [
    "hard_assert",
    "utc_now",
    "ensure_utc",
    "datetime_from_epoch",
    "format_rfc3339",
    "parse_rfc3339",
]
