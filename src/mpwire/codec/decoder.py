"""MessagePack decoder.

This module provides the Decoder class. The caller states which kind of value
comes next by calling the matching expected_* method, mirroring the order in
which the Encoder was driven. There is deliberately no "decode anything" entry
point.

Every failure leaves the cursor on the tag byte of the value that failed, so
the caller can retry the same bytes as a different kind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from ..config import DecoderConfig
from ..exceptions import BadTypeError, DecodeError, InvalidUtf8Error
from ..models.extension import Extension
from . import tags
from .cursor import ByteCursor, BytesLike

logger = logging.getLogger(__name__)


class Decoder:
    """Reads typed values from a MessagePack buffer on demand.

    Example:
        >>> dec = Decoder(b"\\x91\\xa1a")
        >>> dec.expected_array()
        1
        >>> dec.expected_string()
        'a'
    """

    def __init__(self, data: BytesLike, config: DecoderConfig | None = None) -> None:
        """Initialize a decoder over the given buffer.

        Args:
            data: Encoded MessagePack bytes (not copied)
            config: Decoding options, defaults to DecoderConfig()
        """
        self._cursor = ByteCursor(data)
        self._config = config if config is not None else DecoderConfig()

    @property
    def position(self) -> int:
        """Offset of the next unread byte."""
        return self._cursor.position

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return self._cursor.remaining

    def check_nil(self) -> bool:
        """Consume a nil if one comes next.

        Returns:
            True if a nil was consumed, False otherwise (nothing consumed).
            At the end of the buffer this returns False.
        """
        if self._cursor.remaining == 0:
            return False
        if self._cursor.get_uint(8) == tags.NIL:
            return True
        self._cursor.rollback()
        return False

    def expected_bool(self) -> bool:
        """Read a boolean.

        Raises:
            BadTypeError: If the next value is not a boolean
            BoundsError: If the buffer is exhausted
        """
        tag = self._cursor.get_uint(8)
        if tag == tags.TRUE:
            return True
        if tag == tags.FALSE:
            return False
        raise self._mismatch("boolean", tag)

    def expected_binary(self) -> memoryview:
        """Read a binary blob (bin 8/16/32).

        Returns:
            View aliasing the input, or an owned copy with copy_payloads

        Raises:
            BadTypeError: If the next value is not binary
            BoundsError: If the header or payload is truncated
        """
        start = self._cursor.position
        tag = self._cursor.get_uint(8)
        width = tags.BIN_LENGTH_WIDTHS.get(tag)
        if width is None:
            raise self._mismatch("binary", tag)
        with self._restoring(start):
            length = self._cursor.get_uint(width)
            data = self._cursor.get_bytes(length)
        return self._payload(data)

    def expected_extension(self) -> Extension:
        """Read an extension value (fixext 1/2/4/8/16 or ext 8/16/32).

        Raises:
            BadTypeError: If the next value is not an extension
            BoundsError: If the header or payload is truncated
        """
        start = self._cursor.position
        tag = self._cursor.get_uint(8)
        fixed_length = tags.FIXEXT_LENGTHS.get(tag)
        width = tags.EXT_LENGTH_WIDTHS.get(tag)
        if fixed_length is None and width is None:
            raise self._mismatch("extension", tag)
        with self._restoring(start):
            length = fixed_length if width is None else self._cursor.get_uint(width)
            type_id = self._cursor.get_int(8)
            data = self._cursor.get_bytes(length)
        return Extension(type_id=type_id, data=self._payload(data))

    def expected_integer(self) -> int:
        """Read an integer of any width.

        Raises:
            BadTypeError: If the next value is not an integer ("number")
            BoundsError: If the value is truncated
        """
        start = self._cursor.position
        tag = self._cursor.get_uint(8)
        value = self._integer(tag, start)
        if value is None:
            raise self._mismatch("number", tag)
        return value

    def expected_number(self) -> int | float:
        """Read an integer or a float32/float64.

        Raises:
            BadTypeError: If the next value is neither integer nor float
            BoundsError: If the value is truncated
        """
        start = self._cursor.position
        tag = self._cursor.get_uint(8)
        is64 = tags.FLOAT_TAGS.get(tag)
        if is64 is not None:
            with self._restoring(start):
                return self._cursor.get_float(is64)
        value = self._integer(tag, start)
        if value is None:
            raise self._mismatch("number", tag)
        return value

    def expected_string(self) -> str:
        """Read a UTF-8 string (fixstr or str 8/16/32).

        Raises:
            BadTypeError: If the next value is not a string
            BoundsError: If the header or payload is truncated
            InvalidUtf8Error: If the payload is not valid UTF-8 in strict mode
        """
        start = self._cursor.position
        tag = self._cursor.get_uint(8)
        width = None
        if tag not in tags.FIXSTR:
            width = tags.STR_LENGTH_WIDTHS.get(tag)
            if width is None:
                raise self._mismatch("string", tag)
        with self._restoring(start):
            length = tag & tags.FIXSTR_MAX_LENGTH if width is None else self._cursor.get_uint(width)
            return self._text(self._cursor.get_bytes(length))

    def expected_array(self) -> int:
        """Read an array header and return its element count."""
        return self._collection("array", tags.FIXARRAY, tags.ARRAY_LENGTH_WIDTHS)

    def expected_map(self) -> int:
        """Read a map header and return its key-value pair count."""
        return self._collection("map", tags.FIXMAP, tags.MAP_LENGTH_WIDTHS)

    def get_rest(self) -> memoryview:
        """Return the unread remainder of the buffer without consuming it."""
        return self._cursor.get_rest()

    def _integer(self, tag: int, start: int) -> int | None:
        if tag in tags.POSITIVE_FIXINT:
            return tag
        if tag in tags.NEGATIVE_FIXINT:
            return tag - 0x100
        width = tags.UINT_WIDTHS.get(tag)
        if width is not None:
            with self._restoring(start):
                return self._cursor.get_uint(width)
        width = tags.INT_WIDTHS.get(tag)
        if width is not None:
            with self._restoring(start):
                return self._cursor.get_int(width)
        return None

    def _collection(self, kind: str, fix_range: range, widths: dict[int, int]) -> int:
        start = self._cursor.position
        tag = self._cursor.get_uint(8)
        if tag in fix_range:
            return tag & tags.FIXCOLLECTION_MAX_LENGTH
        width = widths.get(tag)
        if width is None:
            raise self._mismatch(kind, tag)
        with self._restoring(start):
            return self._cursor.get_uint(width)

    def _text(self, raw: memoryview) -> str:
        try:
            return str(raw, "utf-8", self._config.unicode_errors)
        except UnicodeDecodeError as err:
            raise InvalidUtf8Error(f"String payload is not valid UTF-8: {err}") from err

    def _payload(self, data: memoryview) -> memoryview:
        if self._config.copy_payloads:
            return memoryview(bytes(data))
        return data

    def _mismatch(self, kind: str, tag: int) -> BadTypeError:
        self._cursor.rollback()
        logger.debug(
            "Expected %s at position %d, found tag 0x%02X", kind, self._cursor.position, tag
        )
        return BadTypeError(kind)

    @contextmanager
    def _restoring(self, start: int) -> Iterator[None]:
        """Put the cursor back on the tag byte if reading the value fails."""
        try:
            yield
        except DecodeError:
            self._cursor.rewind_to(start)
            logger.debug("Decode failed, cursor restored to position %d", start)
            raise
