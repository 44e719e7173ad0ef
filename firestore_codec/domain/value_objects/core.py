"""Domain value objects for the codec.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime

from firestore_codec.core.constants import (
    DEFAULT_DATABASE_ID,
    NANOS_PER_SECOND,
    TIMESTAMP_MAX_SECONDS,
    TIMESTAMP_MIN_SECONDS,
)
from firestore_codec.shared.utils.datetime import (
    UTC_EPOCH,
    datetime_from_epoch,
    ensure_utc,
    utc_now,
)


@dataclass(frozen=True, order=True)
class Timestamp:
    """Point in time with nanosecond precision, independent of any calendar.

    seconds counts from the Unix epoch and must fall within
    0001-01-01T00:00:00Z .. 9999-12-31T23:59:59Z; nanos is the
    non-negative fraction of a second (0..999999999).
    """

    seconds: int
    nanos: int = 0

    def __post_init__(self) -> None:
        """Validate range.

        Raises:
            ValueError: If seconds or nanos are out of range.
        """
        if not TIMESTAMP_MIN_SECONDS <= self.seconds <= TIMESTAMP_MAX_SECONDS:
            raise ValueError(
                f"Timestamp seconds out of range: {self.seconds} "
                f"(supported: {TIMESTAMP_MIN_SECONDS}..{TIMESTAMP_MAX_SECONDS})"
            )
        if not 0 <= self.nanos < NANOS_PER_SECOND:
            raise ValueError(
                f"Timestamp nanos must be between 0 and 999999999, got: {self.nanos}"
            )

    @classmethod
    def from_datetime(cls, dt: datetime) -> Timestamp:
        """Build a Timestamp from a datetime (naive values are taken as UTC)."""
        delta = ensure_utc(dt) - UTC_EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds, delta.microseconds * 1000)

    @classmethod
    def now(cls) -> Timestamp:
        return cls.from_datetime(utc_now())

    def to_datetime(self) -> datetime:
        """Return a UTC-aware datetime (truncated to microseconds)."""
        return datetime_from_epoch(self.seconds, self.nanos // 1000)


@dataclass(frozen=True)
class DatabaseId:
    """Value object identifying a Firestore database within a project."""

    project_id: str
    database_id: str = DEFAULT_DATABASE_ID

    def __post_init__(self) -> None:
        if not self.project_id:
            raise ValueError("Project id must be a non-empty string")
        if not self.database_id:
            raise ValueError("Database id must be a non-empty string")

    @property
    def is_default_database(self) -> bool:
        return self.database_id == DEFAULT_DATABASE_ID


@dataclass(frozen=True)
class ResourcePath:
    """Slash-separated path of non-empty segments (e.g. rooms/abc/messages/1).

    Segments are stored as a tuple; any iterable passed in is normalized.
    """

    segments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Normalize to a tuple and validate segments.

        Raises:
            ValueError: If a segment is empty or contains '/'.
        """
        object.__setattr__(self, "segments", tuple(self.segments))
        for segment in self.segments:
            if not segment:
                raise ValueError("Resource path segments must be non-empty")
            if "/" in segment:
                raise ValueError(
                    f"Resource path segment must not contain '/': {segment!r}"
                )

    @classmethod
    def from_string(cls, path: str) -> ResourcePath:
        """Parse a slash-separated path.

        A leading or trailing '/' is ignored; an empty inner segment
        ('a//b') is rejected.

        Raises:
            ValueError: If the path contains '//'.
        """
        if "//" in path:
            raise ValueError(f"Invalid path ({path}). Paths must not contain // in them.")
        return cls(tuple(segment for segment in path.split("/") if segment))

    def canonical_string(self) -> str:
        return "/".join(self.segments)

    def append(self, other: str | ResourcePath | Iterable[str]) -> ResourcePath:
        """Return a new path with a segment or another path appended."""
        if isinstance(other, str):
            return ResourcePath(self.segments + (other,))
        if isinstance(other, ResourcePath):
            return ResourcePath(self.segments + other.segments)
        return ResourcePath(self.segments + tuple(other))

    def pop_first(self, count: int = 1) -> ResourcePath:
        """Return a new path without the first ``count`` segments."""
        if count > len(self.segments):
            raise ValueError(
                f"Cannot pop {count} segments from a path of length {len(self.segments)}"
            )
        return ResourcePath(self.segments[count:])

    def is_empty(self) -> bool:
        return not self.segments

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> str:
        return self.segments[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __str__(self) -> str:
        return self.canonical_string()


@dataclass(frozen=True)
class DocumentKey:
    """Value object for a document's path relative to its database.

    A document path alternates collection id and document id, so it has an
    even, non-zero number of segments.
    """

    path: ResourcePath

    def __post_init__(self) -> None:
        """Validate the path addresses a document.

        Raises:
            ValueError: If the path is not a document path.
        """
        if not self.is_document_key(self.path):
            raise ValueError(
                "Invalid document key path "
                f"({self.path.canonical_string()!r}): must have an even, non-zero "
                "number of segments"
            )

    @staticmethod
    def is_document_key(path: ResourcePath) -> bool:
        return len(path) > 0 and len(path) % 2 == 0

    @classmethod
    def from_path_string(cls, path: str) -> DocumentKey:
        return cls(ResourcePath.from_string(path))

    @classmethod
    def from_segments(cls, *segments: str) -> DocumentKey:
        return cls(ResourcePath(segments))

    @property
    def collection_path(self) -> ResourcePath:
        return ResourcePath(self.path.segments[:-1])

    @property
    def document_id(self) -> str:
        return self.path.segments[-1]

    def __str__(self) -> str:
        return self.path.canonical_string()
