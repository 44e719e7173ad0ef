"""Protobuf Reader: typed field reads over a ByteSource with a sticky status.

Malformed input never raises out of a Reader operation. The
DataLossException raised by the byte source or the varint decoder is
latched into ``status`` and every later read returns a zero value, so
decoding code can run straight through and check status once at the end.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from firestore_codec.core.constants import MAX_NESTING_DEPTH, NULL_VALUE
from firestore_codec.domain.exceptions import DataLossException
from firestore_codec.domain.value_objects.status import Status
from firestore_codec.infrastructure.wire.byte_streams import ByteSource
from firestore_codec.infrastructure.wire.wire_format import (
    Tag,
    read_tag,
    read_varint,
    to_signed64,
)
from firestore_codec.shared.telemetry.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class Reader:
    """Reads protobuf fields from a ByteSource.

    Attributes:
        depth: Nesting level of this reader (0 for the top level).
        max_depth: Deepest nested message accepted before DATA_LOSS.
        abort_on_unknown_field: Decoders raise instead of returning
            DATA_LOSS when they meet an unknown field number.
    """

    def __init__(
        self,
        source: ByteSource,
        *,
        depth: int = 0,
        max_depth: int = MAX_NESTING_DEPTH,
        abort_on_unknown_field: bool = False,
    ) -> None:
        self._source = source
        self._status = Status.ok_status()
        self.depth = depth
        self.max_depth = max_depth
        self.abort_on_unknown_field = abort_on_unknown_field

    @classmethod
    def wrap(
        cls,
        data: bytes | bytearray | memoryview,
        *,
        max_depth: int = MAX_NESTING_DEPTH,
        abort_on_unknown_field: bool = False,
    ) -> Reader:
        return cls(
            ByteSource(data),
            max_depth=max_depth,
            abort_on_unknown_field=abort_on_unknown_field,
        )

    @property
    def status(self) -> Status:
        return self._status

    @property
    def ok(self) -> bool:
        return self._status.ok

    @property
    def bytes_left(self) -> int:
        return self._source.bytes_left

    def set_status(self, status: Status) -> None:
        """Latch a non-OK status; the first failure wins."""
        if self._status.ok and not status.ok:
            self._status = status

    def fail(self, message: str) -> None:
        self.set_status(Status.data_loss(message))

    def _latch(self, exc: DataLossException) -> None:
        logger.debug("Decode failed at depth %d: %s %s", self.depth, exc.message, exc.details)
        self.fail(exc.message)

    def read_tag(self) -> Tag:
        if not self.ok:
            return Tag()
        try:
            return read_tag(self._source)
        except DataLossException as exc:
            self._latch(exc)
            return Tag()

    def read_varint(self) -> int:
        if not self.ok:
            return 0
        try:
            return read_varint(self._source)
        except DataLossException as exc:
            self._latch(exc)
            return 0

    def read_null(self) -> None:
        value = self.read_varint()
        if not self.ok:
            return
        if value != NULL_VALUE:
            self.fail("Input proto bytes cannot be parsed (invalid null value)")

    def read_bool(self) -> bool:
        value = self.read_varint()
        if not self.ok:
            return False
        if value == 0:
            return False
        if value == 1:
            return True
        self.fail("Input proto bytes cannot be parsed (invalid bool value)")
        return False

    def read_integer(self) -> int:
        """Read a varint and reinterpret it as a signed 64-bit integer."""
        return to_signed64(self.read_varint())

    def read_string(self) -> str:
        if not self.ok:
            return ""
        try:
            length = read_varint(self._source)
            with self._source.bounded_region(length) as region:
                data = region.read(region.bytes_left)
            return data.decode("utf-8")
        except DataLossException as exc:
            self._latch(exc)
        except UnicodeDecodeError as exc:
            self.fail(f"Input proto bytes cannot be parsed (invalid UTF-8: {exc.reason})")
        return ""

    def read_nested_message(self, read_message_fn: Callable[[Reader], T], default: T) -> T:
        """Read a length-prefixed submessage with ``read_message_fn``.

        The submessage is read through a child Reader bounded to the
        declared length. The child must consume the region exactly; any
        failure (including residual bytes) is propagated to this reader.

        Args:
            read_message_fn: Decodes one message from the child Reader.
            default: Returned when this reader or the child fails.
        """
        if not self.ok:
            return default
        if self.depth >= self.max_depth:
            self.fail(f"Input proto bytes cannot be parsed (nesting deeper than {self.max_depth})")
            return default
        try:
            length = read_varint(self._source)
            with self._source.bounded_region(length) as region:
                child = Reader(
                    region,
                    depth=self.depth + 1,
                    max_depth=self.max_depth,
                    abort_on_unknown_field=self.abort_on_unknown_field,
                )
                message = read_message_fn(child)
                if child.ok and child.bytes_left:
                    child.fail(
                        "Bytes remaining in substream after supposedly reading all of them"
                    )
        except DataLossException as exc:
            self._latch(exc)
            return default
        self.set_status(child.status)
        return message if self.ok else default
