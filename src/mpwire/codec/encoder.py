"""MessagePack encoder.

This module provides the Encoder class that appends values to a MessagePack
byte stream, always choosing the smallest size class that can hold each value.
The caller drives the structure: arrays and maps only get a length prefix and
their contents are written by subsequent put_* calls.
"""

from __future__ import annotations

from struct import Struct

from ..exceptions import (
    InvalidExtensionLengthError,
    InvalidValueTypeError,
    UnencodableStringError,
    ValueOutOfRangeError,
)
from ..models.extension import Extension
from . import tags
from .cursor import BytesLike
from .tags import FLOAT32_STRUCT, FLOAT64_STRUCT, INT_STRUCTS, UINT_STRUCTS


class Encoder:
    """Builds a MessagePack byte stream one value at a time.

    Example:
        >>> enc = Encoder()
        >>> enc.put_array(1)
        >>> enc.put_string("a")
        >>> enc.dump()
        b'\\x91\\xa1a'
    """

    def __init__(self) -> None:
        """Initialize an empty encoder."""
        self._buffer = bytearray()
        # Per-instance scratch for big-endian conversion
        self._scratch = bytearray(8)

    def put_nil(self) -> None:
        """Write nil."""
        self._buffer.append(tags.NIL)

    def put_bool(self, flag: bool) -> None:
        """Write a boolean."""
        self._buffer.append(tags.TRUE if flag else tags.FALSE)

    def put_int(self, value: int) -> None:
        """Write an integer in its smallest representation.

        Non-negative values use positive fixint or the unsigned formats,
        negative values use negative fixint or the signed formats.

        Args:
            value: Integer in the range -2**63 .. 2**64 - 1

        Raises:
            InvalidValueTypeError: If value is not an int
            ValueOutOfRangeError: If value does not fit in 64 bits
        """
        if not isinstance(value, int):
            raise InvalidValueTypeError(f"put_int expects int, got {type(value).__name__}")
        if value >= 0:
            if value <= 0x7F:
                self._buffer.append(value)
            elif value <= 0xFF:
                self._put_tagged(tags.UINT8, UINT_STRUCTS[8], value)
            elif value <= 0xFFFF:
                self._put_tagged(tags.UINT16, UINT_STRUCTS[16], value)
            elif value <= 0xFFFFFFFF:
                self._put_tagged(tags.UINT32, UINT_STRUCTS[32], value)
            elif value <= tags.UINT64_MAX:
                self._put_tagged(tags.UINT64, UINT_STRUCTS[64], value)
            else:
                raise ValueOutOfRangeError(f"Integer {value} exceeds uint64 maximum")
        else:
            if value >= tags.FIXINT_MIN:
                self._buffer.append(0x100 + value)
            elif value >= -0x80:
                self._put_tagged(tags.INT8, INT_STRUCTS[8], value)
            elif value >= -0x8000:
                self._put_tagged(tags.INT16, INT_STRUCTS[16], value)
            elif value >= -0x80000000:
                self._put_tagged(tags.INT32, INT_STRUCTS[32], value)
            elif value >= tags.INT64_MIN:
                self._put_tagged(tags.INT64, INT_STRUCTS[64], value)
            else:
                raise ValueOutOfRangeError(f"Integer {value} is below int64 minimum")

    def put_float32(self, value: float) -> None:
        """Write a single-precision float.

        Raises:
            ValueOutOfRangeError: If value is finite but too large for float32
        """
        try:
            self._put_tagged(tags.FLOAT32, FLOAT32_STRUCT, value)
        except OverflowError as err:
            raise ValueOutOfRangeError(f"Float {value} does not fit in float32") from err

    def put_float64(self, value: float) -> None:
        """Write a double-precision float."""
        self._put_tagged(tags.FLOAT64, FLOAT64_STRUCT, value)

    def put_string(self, value: str) -> None:
        """Write a string as UTF-8.

        Args:
            value: Text to write

        Raises:
            UnencodableStringError: If value contains lone surrogates
            ValueOutOfRangeError: If the UTF-8 form is longer than 0xFFFFFFFF bytes
        """
        try:
            encoded = value.encode("utf-8")
        except UnicodeEncodeError as err:
            raise UnencodableStringError(f"String cannot be encoded as UTF-8: {err}") from err

        length = len(encoded)
        if length <= tags.FIXSTR_MAX_LENGTH:
            self._buffer.append(tags.FIXSTR.start | length)
        else:
            self._put_length(length, tags.STR8, tags.STR16, tags.STR32)
        self._buffer += encoded

    def put_binary(self, data: BytesLike) -> None:
        """Write a binary blob.

        Binary has no inline-length form, so even empty data takes two bytes.

        Raises:
            ValueOutOfRangeError: If data is longer than 0xFFFFFFFF bytes
        """
        data = _as_bytes(data)
        self._put_length(len(data), tags.BIN8, tags.BIN16, tags.BIN32)
        self._buffer += data

    def put_array(self, count: int) -> None:
        """Write an array header for count elements.

        The elements themselves are written by the caller afterwards.
        """
        if 0 <= count <= tags.FIXCOLLECTION_MAX_LENGTH:
            self._buffer.append(tags.FIXARRAY.start | count)
        else:
            self._put_length(count, None, tags.ARRAY16, tags.ARRAY32)

    def put_map(self, count: int) -> None:
        """Write a map header for count key-value pairs.

        The keys and values are written by the caller afterwards, alternating.
        """
        if 0 <= count <= tags.FIXCOLLECTION_MAX_LENGTH:
            self._buffer.append(tags.FIXMAP.start | count)
        else:
            self._put_length(count, None, tags.MAP16, tags.MAP32)

    def put_ext(self, type_id: int, data: BytesLike) -> None:
        """Write an extension value.

        Payloads of 1, 2, 4, 8 or 16 bytes use the fixext formats, any other
        length uses ext 8/16/32.

        Args:
            type_id: Application-defined type, -128 .. 127
            data: Extension payload (at least one byte)

        Raises:
            InvalidExtensionLengthError: If data is empty
            ValueOutOfRangeError: If type_id is not a signed 8-bit value or
                data is longer than 0xFFFFFFFF bytes
        """
        if not tags.INT8_MIN <= type_id <= tags.INT8_MAX:
            raise ValueOutOfRangeError(f"Extension type id must be -128..127, got {type_id}")

        data = _as_bytes(data)
        length = len(data)
        if length == 0:
            raise InvalidExtensionLengthError("Extension data must not be empty")

        fixext_tag = tags.FIXEXT_TAGS.get(length)
        if fixext_tag is not None:
            self._buffer.append(fixext_tag)
        else:
            self._put_length(length, tags.EXT8, tags.EXT16, tags.EXT32)
        self._buffer += INT_STRUCTS[8].pack(type_id)
        self._buffer += data

    def put_extension(self, extension: Extension) -> None:
        """Write a decoded Extension back out unchanged."""
        self.put_ext(extension.type_id, extension.data)

    def byte_length(self) -> int:
        """Return the number of bytes written so far."""
        return len(self._buffer)

    def dump(self, rest: BytesLike | None = None) -> bytes:
        """Return the encoded stream.

        Args:
            rest: Optional bytes appended verbatim, typically the unread
                remainder of a Decoder being forwarded

        Returns:
            Immutable snapshot of the stream; later put_* calls do not affect it
        """
        if rest is None:
            return bytes(self._buffer)
        return bytes(self._buffer) + bytes(rest)

    def _put_tagged(self, tag: int, fmt: Struct, value: int | float) -> None:
        fmt.pack_into(self._scratch, 0, value)
        self._buffer.append(tag)
        self._buffer += self._scratch[: fmt.size]

    def _put_length(self, length: int, tag8: int | None, tag16: int, tag32: int) -> None:
        """Write a length header in the smallest width the family offers.

        tag8 is None for families without an 8-bit length form (array, map).
        """
        if length < 0 or length > tags.LENGTH32_MAX:
            raise ValueOutOfRangeError(f"Length {length} does not fit in 32 bits")
        if tag8 is not None and length <= 0xFF:
            self._put_tagged(tag8, UINT_STRUCTS[8], length)
        elif length <= 0xFFFF:
            self._put_tagged(tag16, UINT_STRUCTS[16], length)
        else:
            self._put_tagged(tag32, UINT_STRUCTS[32], length)


def _as_bytes(data: BytesLike) -> memoryview:
    """View data as unsigned bytes so len() counts bytes, not items."""
    return memoryview(data).cast("B")
