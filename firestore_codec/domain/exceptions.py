"""Domain exceptions for the codec.

Two disjoint failure classes:

- DataLossException: recoverable. Malformed or hostile input found while
  decoding. Callers get it as an exception or as a non-OK Status.
- InternalCodecError: fatal programmer error (unsupported value type,
  non-deterministic nested message, cross-database key, size ceiling).
  Never caught by the codec itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from firestore_codec.domain.value_objects.status import Status


class CodecException(Exception):
    """Base exception for all codec errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field_number, wire_type).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class DataLossException(CodecException):
    """Raised when input bytes cannot be parsed (truncated, corrupt, or out of range)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize with message and optional context.

        Args:
            message: Description of what could not be parsed.
            details: Optional dict of extra context.
        """
        super().__init__(message, "DATA_LOSS", details)

    @property
    def status(self) -> Status:
        """Return the equivalent non-OK Status."""
        from firestore_codec.domain.value_objects.status import Status

        return Status.data_loss(self.message)


class InternalCodecError(CodecException):
    """Raised when a codec invariant is violated by the caller or by the codec itself."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "INTERNAL", details)
