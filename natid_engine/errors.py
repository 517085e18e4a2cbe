"""
Validation error kinds.

Validators report failures as ErrorKind values instead of raising. Each kind
corresponds to one python-stdnum exception class, which is what compact()
and the number-decoding helpers raise.
"""

from enum import Enum

from stdnum.exceptions import (
    InvalidChecksum,
    InvalidFormat,
    InvalidLength,
    ValidationError,
)


class ErrorKind(Enum):
    """Reason a number failed validation."""
    INVALID_FORMAT = "invalid_format"
    INVALID_LENGTH = "invalid_length"
    INVALID_CHECKSUM = "invalid_checksum"

    @classmethod
    def from_exception(cls, exc: ValidationError) -> "ErrorKind":
        """Map a stdnum exception onto its kind (unknown subclasses are format errors)."""
        if isinstance(exc, InvalidLength):
            return cls.INVALID_LENGTH
        if isinstance(exc, InvalidChecksum):
            return cls.INVALID_CHECKSUM
        return cls.INVALID_FORMAT

    def to_exception(self) -> ValidationError:
        return _EXCEPTIONS[self]()


_EXCEPTIONS = {
    ErrorKind.INVALID_FORMAT: InvalidFormat,
    ErrorKind.INVALID_LENGTH: InvalidLength,
    ErrorKind.INVALID_CHECKSUM: InvalidChecksum,
}
