"""Byte-level read cursor with single-step rollback.

This module provides the low-level reader the decoder is built on. All reads
are big-endian and every read remembers where it started, so the most recent
read can be undone exactly once.
"""

from __future__ import annotations

from struct import Struct

from ..exceptions import BoundsError, NoHistoryError, UnsupportedWidthError
from .tags import FLOAT32_STRUCT, FLOAT64_STRUCT, INT_STRUCTS, UINT_STRUCTS

BytesLike = bytes | bytearray | memoryview


class ByteCursor:
    """Reads fixed-width values and byte views from an in-memory buffer.

    The cursor never copies the source: ``get_bytes`` and ``get_rest`` return
    views aliasing it, so the caller must keep the buffer unchanged while those
    views are in use.

    Example:
        >>> cursor = ByteCursor(b"\\xcd\\x01\\x00")
        >>> cursor.get_uint(8)
        205
        >>> cursor.rollback()
        >>> cursor.position
        0
    """

    def __init__(self, data: BytesLike) -> None:
        """Initialize a cursor at the start of the given buffer.

        Args:
            data: Byte buffer to read from (not copied)
        """
        self._buffer = memoryview(data).cast("B").toreadonly()
        self._position = 0
        self._last_read_start: int | None = None

    @property
    def position(self) -> int:
        """Current read position in bytes."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._buffer) - self._position

    def get_uint(self, num_bits: int) -> int:
        """Read a big-endian unsigned integer.

        Args:
            num_bits: Width of the value (8, 16, 32 or 64)

        Returns:
            Unsigned integer value

        Raises:
            UnsupportedWidthError: If num_bits is not a supported width
            BoundsError: If not enough bytes are available
        """
        return self._unpack(_struct_for(UINT_STRUCTS, num_bits))

    def get_int(self, num_bits: int) -> int:
        """Read a big-endian two's complement signed integer.

        Args:
            num_bits: Width of the value (8, 16, 32 or 64)

        Returns:
            Signed integer value

        Raises:
            UnsupportedWidthError: If num_bits is not a supported width
            BoundsError: If not enough bytes are available
        """
        return self._unpack(_struct_for(INT_STRUCTS, num_bits))

    def get_float(self, is64: bool) -> float:
        """Read a big-endian IEEE-754 float (8 bytes if is64, else 4)."""
        return self._unpack(FLOAT64_STRUCT if is64 else FLOAT32_STRUCT)

    def get_bytes(self, num_bytes: int) -> memoryview:
        """Return a view over the next num_bytes bytes and advance past them.

        Args:
            num_bytes: Number of bytes to take

        Returns:
            Read-only view aliasing the source buffer

        Raises:
            BoundsError: If num_bytes is negative or not enough bytes are available
        """
        self._require(num_bytes)
        start = self._position
        view = self._buffer[start : start + num_bytes]
        self._last_read_start = start
        self._position = start + num_bytes
        return view

    def get_rest(self) -> memoryview:
        """Return a view over all unread bytes without advancing."""
        return self._buffer[self._position :]

    def rollback(self) -> None:
        """Undo the most recent read.

        Only one level of history is kept: a second rollback without an
        intervening read fails.

        Raises:
            NoHistoryError: If there is no read to undo
        """
        if self._last_read_start is None:
            raise NoHistoryError("no history")
        self._position = self._last_read_start
        self._last_read_start = None

    def rewind_to(self, position: int) -> None:
        """Move back to an earlier position, discarding rollback history.

        Args:
            position: A position at or before the current one

        Raises:
            ValueError: If position is negative or ahead of the current position
        """
        if position < 0 or position > self._position:
            raise ValueError(f"Cannot rewind to {position} from position {self._position}")
        self._position = position
        self._last_read_start = None

    def _unpack(self, fmt: Struct) -> int | float:
        self._require(fmt.size)
        (value,) = fmt.unpack_from(self._buffer, self._position)
        self._last_read_start = self._position
        self._position += fmt.size
        return value

    def _require(self, num_bytes: int) -> None:
        if num_bytes < 0:
            raise BoundsError(f"Cannot read a negative number of bytes: {num_bytes}")
        if num_bytes > self.remaining:
            raise BoundsError(
                f"Not enough bytes at position {self._position}: "
                f"need {num_bytes}, have {self.remaining}"
            )


def _struct_for(table: dict[int, Struct], num_bits: int) -> Struct:
    try:
        return table[num_bits]
    except KeyError as err:
        raise UnsupportedWidthError(f"num_bits must be 8, 16, 32 or 64, got {num_bits}") from err
