"""Status value object: the sticky OK-or-error result of a stream."""

from dataclasses import dataclass

from firestore_codec.domain.enums import ErrorCode
from firestore_codec.domain.exceptions import DataLossException


@dataclass(frozen=True)
class Status:
    """Outcome of an encode or decode.

    Streams keep the first non-OK Status they see and turn every later
    operation into a no-op.
    """

    code: ErrorCode = ErrorCode.OK
    message: str = ""

    @classmethod
    def ok_status(cls) -> "Status":
        return cls()

    @classmethod
    def data_loss(cls, message: str) -> "Status":
        return cls(ErrorCode.DATA_LOSS, message)

    @property
    def ok(self) -> bool:
        return self.code is ErrorCode.OK

    def raise_for_status(self) -> None:
        """Raise DataLossException if this status is not OK.

        Raises:
            DataLossException: With this status' message.
        """
        if not self.ok:
            raise DataLossException(self.message, {"code": self.code.value})

    def __str__(self) -> str:
        if self.ok:
            return "OK"
        return f"{self.code.value}: {self.message}"
