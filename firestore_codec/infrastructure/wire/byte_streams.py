"""Byte sinks and sources underneath the protobuf Writer and Reader.

ByteSink appends to a caller-owned bytearray (or only counts, in sizing
mode). ByteSource reads from caller-owned immutable bytes and carves
bounded sub-regions for length-delimited fields. Neither copies the whole
input: a source is a memoryview plus a cursor.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager

from firestore_codec.core.constants import MAX_DOCUMENT_SIZE
from firestore_codec.domain.exceptions import DataLossException
from firestore_codec.domain.value_objects.status import Status
from firestore_codec.shared.utils.assertions import hard_assert


class ByteSink:
    """Output side: a bytearray (or nothing, when sizing) plus a byte count.

    Appends are no-ops once status is not OK. Writing past max_size is a
    programmer error: the service rejects documents over 1 MiB - 4 bytes.
    """

    def __init__(self, buffer: bytearray | None, max_size: int = MAX_DOCUMENT_SIZE) -> None:
        self._buffer = buffer
        self.max_size = max_size
        self.bytes_written = 0
        self.status = Status.ok_status()

    @classmethod
    def wrap(cls, buffer: bytearray, max_size: int = MAX_DOCUMENT_SIZE) -> ByteSink:
        return cls(buffer, max_size)

    @classmethod
    def sizing(cls) -> ByteSink:
        """Return a sink that only counts bytes."""
        return cls(None, sys.maxsize)

    @property
    def size_only(self) -> bool:
        return self._buffer is None

    @property
    def ok(self) -> bool:
        return self.status.ok

    def fail(self, status: Status) -> None:
        """Latch a non-OK status; the first failure wins."""
        if self.status.ok:
            self.status = status

    def _reserve(self, count: int) -> None:
        hard_assert(
            self.bytes_written + count <= self.max_size,
            "Insufficient space in the output stream: %d + %d bytes exceeds %d",
            self.bytes_written,
            count,
            self.max_size,
        )

    def append(self, data: bytes) -> None:
        if not self.status.ok:
            return
        self._reserve(len(data))
        if self._buffer is not None:
            self._buffer.extend(data)
        self.bytes_written += len(data)

    def skip(self, count: int) -> None:
        """Account for ``count`` bytes without writing them (sizing sinks only)."""
        if not self.status.ok:
            return
        hard_assert(self.size_only, "skip() is only valid on a sizing sink")
        self._reserve(count)
        self.bytes_written += count

    def substream(self, max_size: int) -> ByteSink:
        """Return a sink appending to the same buffer, limited to ``max_size`` bytes."""
        hard_assert(not self.size_only, "substream() is not valid on a sizing sink")
        return ByteSink(self._buffer, max_size)

    def absorb(self, child: ByteSink) -> None:
        """Fold a substream's byte count (and failure, if any) back into this sink."""
        self.bytes_written += child.bytes_written
        if not child.status.ok:
            self.fail(child.status)


class ByteSource:
    """Input side: a read cursor over an immutable byte slice.

    Reads raise DataLossException when the (possibly bounded) region runs
    out; the Reader latches that into its sticky status.
    """

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        start: int = 0,
        end: int | None = None,
    ) -> None:
        self._data = data if isinstance(data, memoryview) else memoryview(data)
        self._pos = start
        self._end = len(self._data) if end is None else end

    @property
    def bytes_left(self) -> int:
        return self._end - self._pos

    @property
    def position(self) -> int:
        return self._pos

    def read(self, count: int) -> bytes:
        """Consume exactly ``count`` bytes.

        Raises:
            DataLossException: If fewer than ``count`` bytes remain.
        """
        if count < 0 or count > self.bytes_left:
            raise DataLossException(
                "end-of-stream",
                {"requested": count, "bytes_left": self.bytes_left},
            )
        chunk = bytes(self._data[self._pos : self._pos + count])
        self._pos += count
        return chunk

    def read_byte(self) -> int:
        """Consume one byte.

        Raises:
            DataLossException: If the region is exhausted.
        """
        if self._pos >= self._end:
            raise DataLossException("end-of-stream", {"requested": 1, "bytes_left": 0})
        value = self._data[self._pos]
        self._pos += 1
        return value

    @contextmanager
    def bounded_region(self, length: int) -> Iterator[ByteSource]:
        """Yield a child source over the next ``length`` bytes.

        The parent must not be read while the region is open. On exit, on
        success or error alike, the parent's cursor moves past all
        ``length`` bytes whether or not the child consumed them.

        Raises:
            DataLossException: If ``length`` exceeds the bytes left.
        """
        if length > self.bytes_left:
            raise DataLossException(
                "parent stream too short",
                {"length": length, "bytes_left": self.bytes_left},
            )
        start = self._pos
        try:
            yield ByteSource(self._data, start, start + length)
        finally:
            self._pos = start + length
