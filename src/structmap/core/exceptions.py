"""
Custom exception classes for structmap.

Every failure of a conversion call is terminal: errors raised while
converting a nested record propagate to the original caller unchanged.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Category of a conversion failure."""

    NIL_INPUT = "nil_input"
    NOT_A_RECORD = "not_a_record"
    INVALID_OVERRIDE_SIGNATURE = "invalid_override_signature"
    CYCLIC_RECORD = "cyclic_record"


class StructMapError(Exception):
    """
    Base exception class for all structmap exceptions.

    Example:
        >>> raise NotARecordError(
        ...     reason="data is not a record but int",
        ...     details={"type": "int"},
        ... )
    """

    kind: ErrorKind

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        self.reason = reason
        self.details = details or {}
        message = f"{reason}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class NilInputError(StructMapError):
    """Raised when the input to a conversion is ``None``."""

    kind = ErrorKind.NIL_INPUT


class NotARecordError(StructMapError):
    """Raised when the input is neither a dataclass nor a pydantic model instance."""

    kind = ErrorKind.NOT_A_RECORD


class InvalidOverrideSignatureError(StructMapError):
    """
    Raised when the named override method exists on a field's type but does
    not behave like ``() -> tuple[str, Any]``.
    """

    kind = ErrorKind.INVALID_OVERRIDE_SIGNATURE


class CyclicRecordError(StructMapError):
    """Raised when a record type reaches itself through its tagged fields."""

    kind = ErrorKind.CYCLIC_RECORD
