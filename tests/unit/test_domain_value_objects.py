"""Tests for domain value objects (Timestamp, DatabaseId, ResourcePath, DocumentKey)."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from firestore_codec.domain.value_objects.core import (
    DatabaseId,
    DocumentKey,
    ResourcePath,
    Timestamp,
)


class TestTimestamp:
    """Timestamp: seconds within 0001..9999, nanos within 0..999999999."""

    def test_valid_bounds(self) -> None:
        Timestamp(-62135596800, 0)
        Timestamp(253402300799, 999_999_999)
        Timestamp(0)

    def test_seconds_below_min_rejected(self) -> None:
        with pytest.raises(ValueError, match="seconds out of range"):
            Timestamp(-62135596801, 0)

    def test_seconds_above_max_rejected(self) -> None:
        with pytest.raises(ValueError, match="seconds out of range"):
            Timestamp(253402300800, 0)

    def test_negative_nanos_rejected(self) -> None:
        with pytest.raises(ValueError, match="nanos"):
            Timestamp(0, -1)

    def test_nanos_overflow_rejected(self) -> None:
        with pytest.raises(ValueError, match="nanos"):
            Timestamp(0, 1_000_000_000)

    def test_from_datetime_aware(self) -> None:
        dt = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=UTC)
        ts = Timestamp.from_datetime(dt)
        assert ts.seconds == int(dt.timestamp())
        assert ts.nanos == 678_901_000
        assert ts.to_datetime() == dt

    def test_from_datetime_converts_offset(self) -> None:
        dt = datetime(2024, 1, 2, 5, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert Timestamp.from_datetime(dt) == Timestamp.from_datetime(
            datetime(2024, 1, 2, 3, 0, 0, tzinfo=UTC)
        )

    def test_naive_datetime_taken_as_utc(self) -> None:
        assert Timestamp.from_datetime(datetime(1970, 1, 1, 0, 0, 1)) == Timestamp(1, 0)

    def test_pre_epoch(self) -> None:
        ts = Timestamp.from_datetime(datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=UTC))
        assert ts == Timestamp(-1, 500_000_000)

    def test_year_one_round_trips_through_datetime(self) -> None:
        ts = Timestamp(-62135596800, 0)
        assert ts.to_datetime() == datetime(1, 1, 1, tzinfo=UTC)

    def test_ordering(self) -> None:
        assert Timestamp(1, 0) < Timestamp(1, 1) < Timestamp(2, 0)

    def test_now_is_in_range(self) -> None:
        assert Timestamp.now().seconds > 1_600_000_000


class TestDatabaseId:
    """DatabaseId: non-empty project and database ids; '(default)' database."""

    def test_default_database(self) -> None:
        db = DatabaseId("p")
        assert db.database_id == "(default)"
        assert db.is_default_database is True

    def test_named_database(self) -> None:
        assert DatabaseId("p", "other").is_default_database is False

    def test_empty_project_rejected(self) -> None:
        with pytest.raises(ValueError, match="Project id"):
            DatabaseId("")

    def test_empty_database_rejected(self) -> None:
        with pytest.raises(ValueError, match="Database id"):
            DatabaseId("p", "")


class TestResourcePath:
    """ResourcePath: tuple of non-empty segments, canonical form joined with '/'."""

    def test_from_string_and_canonical(self) -> None:
        path = ResourcePath.from_string("rooms/abc/messages/1")
        assert path.segments == ("rooms", "abc", "messages", "1")
        assert path.canonical_string() == "rooms/abc/messages/1"
        assert str(path) == "rooms/abc/messages/1"

    def test_leading_and_trailing_slash_ignored(self) -> None:
        assert ResourcePath.from_string("/a/b/") == ResourcePath(("a", "b"))

    def test_empty_string_is_empty_path(self) -> None:
        assert ResourcePath.from_string("").is_empty()

    def test_double_slash_rejected(self) -> None:
        with pytest.raises(ValueError, match="//"):
            ResourcePath.from_string("a//b")

    def test_segments_normalized_to_tuple(self) -> None:
        assert ResourcePath(["a", "b"]).segments == ("a", "b")

    def test_empty_segment_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            ResourcePath(("a", ""))

    def test_slash_in_segment_rejected(self) -> None:
        with pytest.raises(ValueError, match="must not contain"):
            ResourcePath(("a/b",))

    def test_append_segment_path_and_iterable(self) -> None:
        base = ResourcePath(("a",))
        assert base.append("b") == ResourcePath(("a", "b"))
        assert base.append(ResourcePath(("b", "c"))) == ResourcePath(("a", "b", "c"))
        assert base.append(["b"]) == ResourcePath(("a", "b"))
        assert base == ResourcePath(("a",))

    def test_pop_first(self) -> None:
        path = ResourcePath(("a", "b", "c"))
        assert path.pop_first() == ResourcePath(("b", "c"))
        assert path.pop_first(3).is_empty()
        with pytest.raises(ValueError, match="Cannot pop"):
            path.pop_first(4)

    def test_sequence_protocol(self) -> None:
        path = ResourcePath(("a", "b"))
        assert len(path) == 2
        assert path[1] == "b"
        assert list(path) == ["a", "b"]


class TestDocumentKey:
    """DocumentKey: even, non-zero number of segments."""

    def test_valid_keys(self) -> None:
        key = DocumentKey.from_path_string("rooms/abc")
        assert key.document_id == "abc"
        assert key.collection_path == ResourcePath(("rooms",))
        DocumentKey.from_segments("rooms", "abc", "messages", "1")

    def test_collection_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="even"):
            DocumentKey.from_path_string("rooms")

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="even"):
            DocumentKey(ResourcePath())

    def test_equality_by_value(self) -> None:
        assert DocumentKey.from_path_string("a/b") == DocumentKey.from_segments("a", "b")
        assert str(DocumentKey.from_segments("a", "b")) == "a/b"
