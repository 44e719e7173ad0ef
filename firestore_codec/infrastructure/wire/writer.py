"""Protobuf Writer: typed field writes over a ByteSink with a sticky status.

Nested messages are length-prefixed with a two-pass scheme: the body
function runs once against a sizing Writer to learn its length, then
again against the real output. Nothing is buffered per nesting level, so
peak memory stays proportional to depth. The body function must be
deterministic; a size mismatch between the passes is a programmer error.
Nesting is capped at the same depth the Reader accepts, so anything that
encodes also decodes.
"""

from __future__ import annotations

from collections.abc import Callable

from firestore_codec.core.constants import MAX_DOCUMENT_SIZE, MAX_NESTING_DEPTH, NULL_VALUE
from firestore_codec.domain.value_objects.status import Status
from firestore_codec.infrastructure.wire.byte_streams import ByteSink
from firestore_codec.infrastructure.wire.wire_format import (
    Tag,
    encode_tag,
    encode_varint,
    to_unsigned64,
)
from firestore_codec.shared.utils.assertions import hard_assert


class Writer:
    """Writes protobuf fields to a ByteSink.

    Every operation is a no-op once status is not OK. Encoding trusted
    domain values never fails recoverably; invariant violations raise
    InternalCodecError.

    Attributes:
        depth: Nesting level of this writer (0 for the top level).
        max_depth: Deepest nested message allowed.
    """

    def __init__(
        self,
        sink: ByteSink,
        *,
        depth: int = 0,
        max_depth: int = MAX_NESTING_DEPTH,
    ) -> None:
        self._sink = sink
        self.depth = depth
        self.max_depth = max_depth

    @classmethod
    def wrap(
        cls,
        out_bytes: bytearray,
        max_size: int = MAX_DOCUMENT_SIZE,
        *,
        max_depth: int = MAX_NESTING_DEPTH,
    ) -> Writer:
        """Return a Writer appending to ``out_bytes``, limited to ``max_size`` bytes."""
        return cls(ByteSink.wrap(out_bytes, max_size), max_depth=max_depth)

    @classmethod
    def sizing(cls, *, max_depth: int = MAX_NESTING_DEPTH) -> Writer:
        """Return a Writer that only counts the bytes it would write."""
        return cls(ByteSink.sizing(), max_depth=max_depth)

    @property
    def status(self) -> Status:
        return self._sink.status

    @property
    def bytes_written(self) -> int:
        return self._sink.bytes_written

    @property
    def is_sizing(self) -> bool:
        return self._sink.size_only

    def write_tag(self, tag: Tag) -> None:
        if not self.status.ok:
            return
        self._sink.append(encode_tag(tag))

    def write_varint(self, value: int) -> None:
        if not self.status.ok:
            return
        self._sink.append(encode_varint(value))

    def write_size(self, size: int) -> None:
        self.write_varint(size)

    def write_null(self) -> None:
        self.write_varint(NULL_VALUE)

    def write_bool(self, value: bool) -> None:
        self.write_varint(1 if value else 0)

    def write_integer(self, value: int) -> None:
        """Write a signed 64-bit integer as its two's-complement varint (no zig-zag)."""
        self.write_varint(to_unsigned64(value))

    def write_string(self, value: str) -> None:
        if not self.status.ok:
            return
        data = value.encode("utf-8")
        self._sink.append(encode_varint(len(data)))
        self._sink.append(data)

    def write_nested_message(self, write_message_fn: Callable[[Writer], None]) -> None:
        """Write a length-prefixed submessage whose body ``write_message_fn`` emits.

        Args:
            write_message_fn: Writes the submessage's fields to the Writer it
                is given. Called twice when writing, once when sizing.

        Raises:
            InternalCodecError: If nesting would exceed max_depth.
        """
        if not self.status.ok:
            return
        hard_assert(
            self.depth < self.max_depth,
            "Nested message deeper than %d levels cannot be encoded",
            self.max_depth,
        )

        sizer = Writer(ByteSink.sizing(), depth=self.depth + 1, max_depth=self.max_depth)
        write_message_fn(sizer)
        if not sizer.status.ok:
            self._sink.fail(sizer.status)
            return
        size = sizer.bytes_written

        self.write_size(size)
        if not self.status.ok:
            return

        if self.is_sizing:
            # The sizing pass above already visited the body; just account for it.
            self._sink.skip(size)
            return

        hard_assert(
            self.bytes_written + size <= self._sink.max_size,
            "Insufficient space in the output stream to write the given message",
        )
        nested = Writer(
            self._sink.substream(size), depth=self.depth + 1, max_depth=self.max_depth
        )
        write_message_fn(nested)
        self._sink.absorb(nested._sink)
        if not self.status.ok:
            return
        hard_assert(
            nested.bytes_written == size,
            "Writing the nested message twice yielded different sizes (%d vs %d)",
            size,
            nested.bytes_written,
        )
