"""Hard assertions for codec invariants.

Unlike the assert statement these are never stripped by -O: a violated
invariant means a programmer error, and continuing would emit corrupt
bytes.
"""

from typing import Any

from firestore_codec.domain.exceptions import InternalCodecError
from firestore_codec.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def hard_assert(condition: bool, message: str, *args: Any) -> None:
    """Raise InternalCodecError (after logging at CRITICAL) if condition is false.

    Args:
        condition: Invariant that must hold.
        message: %-style message describing the violation.
        *args: Arguments for message.

    Raises:
        InternalCodecError: If condition is false.
    """
    if condition:
        return
    formatted = message % args if args else message
    logger.critical("ASSERTION FAILED: %s", formatted)
    raise InternalCodecError(formatted)
