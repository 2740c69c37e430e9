"""Error taxonomy.

Only hard failures are exceptions. A language directory without a complete
file set is reported as a ``SkippedLanguage`` value by the resolver instead.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    TRANSPORT_FAILED = "TRANSPORT_FAILED"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    UNEXPECTED_ENTRY_KIND = "UNEXPECTED_ENTRY_KIND"
    SERIALIZATION_FAILED = "SERIALIZATION_FAILED"
    WRITE_FAILED = "WRITE_FAILED"


class ZSpellIndexError(Exception):
    """Base class for every error raised by this package.

    ``recoverable`` tells the builder whether the failure may be absorbed for a
    single language (the run continues but is flagged incomplete).
    """

    code: ErrorCode
    recoverable: bool

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(ZSpellIndexError):
    """Network failure or non-success HTTP status."""

    code = ErrorCode.TRANSPORT_FAILED
    recoverable = True


class ResponseFormatError(ZSpellIndexError):
    """Payload did not match the expected shape."""

    code = ErrorCode.INVALID_RESPONSE
    recoverable = True


class StructuralError(ZSpellIndexError):
    """A listing entry is a directory where a file was expected."""

    code = ErrorCode.UNEXPECTED_ENTRY_KIND
    recoverable = True


class SerializationError(ZSpellIndexError):
    code = ErrorCode.SERIALIZATION_FAILED
    recoverable = False


class IOWriteError(ZSpellIndexError):
    code = ErrorCode.WRITE_FAILED
    recoverable = False
