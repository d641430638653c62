"""mpwire: Caller-driven MessagePack Codec

A Python library for reading and writing the MessagePack wire format over
in-memory buffers. The caller supplies the schema implicitly by calling the
matching put_*/expected_* method in the right order.

Key Features:
- Canonical, minimal-width encoding of every MessagePack primitive
- Typed decoding with tag-level mismatch detection
- Failed reads leave the cursor on the tag byte, so the caller can retry
- Zero-copy views for binary and extension payloads

Quick Start:
    >>> from mpwire import Decoder, Encoder
    >>>
    >>> enc = Encoder()
    >>> enc.put_map(1)
    >>> enc.put_string("depth")
    >>> enc.put_int(1500)
    >>> data = enc.dump()
    >>>
    >>> dec = Decoder(data)
    >>> dec.expected_map()
    1
    >>> dec.expected_string(), dec.expected_integer()
    ('depth', 1500)
"""

from __future__ import annotations

from .codec import ByteCursor, Decoder, Encoder
from .config import DecoderConfig
from .exceptions import (
    BadTypeError,
    BoundsError,
    DecodeError,
    EncodeError,
    ErrorKind,
    InvalidExtensionLengthError,
    InvalidUtf8Error,
    InvalidValueTypeError,
    MpwireError,
    NoHistoryError,
    UnencodableStringError,
    UnsupportedWidthError,
    ValueOutOfRangeError,
)
from .models import Extension

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Encoder",
    "Decoder",
    "ByteCursor",
    "Extension",
    "DecoderConfig",
    # Exceptions
    "ErrorKind",
    "MpwireError",
    "EncodeError",
    "DecodeError",
    "BoundsError",
    "BadTypeError",
    "InvalidUtf8Error",
    "NoHistoryError",
    "InvalidExtensionLengthError",
    "ValueOutOfRangeError",
    "InvalidValueTypeError",
    "UnencodableStringError",
    "UnsupportedWidthError",
    # Version
    "__version__",
]
