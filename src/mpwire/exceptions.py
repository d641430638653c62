"""Exception hierarchy for mpwire.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from MpwireError for easy catching of any mpwire-specific error,
and every concrete exception carries an ErrorKind so callers can match on the cause.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """Closed set of failure causes reported by the codec."""

    BOUNDS = "bounds"
    BAD_TYPE = "bad_type"
    NO_HISTORY = "no_history"
    INVALID_EXTENSION_LENGTH = "invalid_extension_length"
    INVALID_UTF8 = "invalid_utf8"
    VALUE_OUT_OF_RANGE = "value_out_of_range"
    INVALID_VALUE_TYPE = "invalid_value_type"
    UNSUPPORTED_WIDTH = "unsupported_width"


class MpwireError(Exception):
    """Base exception for all mpwire errors."""

    kind: ErrorKind | None = None


class EncodeError(MpwireError):
    """Raised when a value cannot be written to the MessagePack stream.

    Examples:
        - Integer outside the 64-bit range
        - Zero-length extension payload
        - Length or count that does not fit in 32 bits
    """

    pass


class DecodeError(MpwireError):
    """Raised when a MessagePack stream cannot be read as requested.

    Examples:
        - Truncated data (insufficient bytes)
        - Tag byte that does not match the expected kind
        - String payload that is not valid UTF-8
    """

    pass


class BoundsError(DecodeError):
    """A fixed-width or length-prefixed read would run past the end of the buffer."""

    kind = ErrorKind.BOUNDS


class BadTypeError(DecodeError):
    """The tag byte does not belong to any encoding of the expected kind.

    The cursor has already been restored to the tag byte when this is raised,
    so the same bytes can be decoded again as a different kind.
    """

    kind = ErrorKind.BAD_TYPE

    def __init__(self, expected_kind: str) -> None:
        super().__init__(f"Bad type {expected_kind}")
        self.expected_kind = expected_kind


class InvalidUtf8Error(DecodeError):
    """String payload is not valid UTF-8."""

    kind = ErrorKind.INVALID_UTF8


class NoHistoryError(MpwireError):
    """rollback() called with no read to undo."""

    kind = ErrorKind.NO_HISTORY


class InvalidExtensionLengthError(EncodeError):
    """Extension data must carry at least one byte."""

    kind = ErrorKind.INVALID_EXTENSION_LENGTH


class ValueOutOfRangeError(EncodeError):
    """Value, length or type id does not fit any MessagePack representation."""

    kind = ErrorKind.VALUE_OUT_OF_RANGE


class InvalidValueTypeError(EncodeError):
    """Value has the wrong Python type for the put_* method it was given to."""

    kind = ErrorKind.INVALID_VALUE_TYPE


class UnencodableStringError(EncodeError):
    """String contains code points (lone surrogates) with no UTF-8 form."""

    kind = ErrorKind.INVALID_UTF8


class UnsupportedWidthError(MpwireError):
    """Fixed-width read requested with a bit width other than 8, 16, 32 or 64."""

    kind = ErrorKind.UNSUPPORTED_WIDTH
