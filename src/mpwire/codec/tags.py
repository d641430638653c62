"""MessagePack tag bytes and big-endian struct tables.

Single-byte tags are plain constants. The "fix" families, where the low bits of
the tag carry a value or length inline, are ``range`` objects so that membership
checks read the same way as a table lookup.
"""

from __future__ import annotations

from struct import Struct

# Fix families (tag byte carries the value or length)
POSITIVE_FIXINT = range(0x00, 0x80)  # value = tag
FIXMAP = range(0x80, 0x90)  # pair count = tag & 0x0F
FIXARRAY = range(0x90, 0xA0)  # element count = tag & 0x0F
FIXSTR = range(0xA0, 0xC0)  # byte length = tag & 0x1F
NEGATIVE_FIXINT = range(0xE0, 0x100)  # value = tag - 0x100

FIXINT_MIN = -0x20
FIXSTR_MAX_LENGTH = 0x1F
FIXCOLLECTION_MAX_LENGTH = 0x0F

# Single-byte tags
NIL = 0xC0
FALSE = 0xC2
TRUE = 0xC3
BIN8 = 0xC4
BIN16 = 0xC5
BIN32 = 0xC6
EXT8 = 0xC7
EXT16 = 0xC8
EXT32 = 0xC9
FLOAT32 = 0xCA
FLOAT64 = 0xCB
UINT8 = 0xCC
UINT16 = 0xCD
UINT32 = 0xCE
UINT64 = 0xCF
INT8 = 0xD0
INT16 = 0xD1
INT32 = 0xD2
INT64 = 0xD3
FIXEXT1 = 0xD4
FIXEXT2 = 0xD5
FIXEXT4 = 0xD6
FIXEXT8 = 0xD7
FIXEXT16 = 0xD8
STR8 = 0xD9
STR16 = 0xDA
STR32 = 0xDB
ARRAY16 = 0xDC
ARRAY32 = 0xDD
MAP16 = 0xDE
MAP32 = 0xDF

# Explicit-width families: tag -> bit width of what follows the tag.
# For integers that is the value itself, for the rest it is the length field.
UINT_WIDTHS = {UINT8: 8, UINT16: 16, UINT32: 32, UINT64: 64}
INT_WIDTHS = {INT8: 8, INT16: 16, INT32: 32, INT64: 64}
FLOAT_TAGS = {FLOAT32: False, FLOAT64: True}  # tag -> is64
BIN_LENGTH_WIDTHS = {BIN8: 8, BIN16: 16, BIN32: 32}
STR_LENGTH_WIDTHS = {STR8: 8, STR16: 16, STR32: 32}
ARRAY_LENGTH_WIDTHS = {ARRAY16: 16, ARRAY32: 32}
MAP_LENGTH_WIDTHS = {MAP16: 16, MAP32: 32}
EXT_LENGTH_WIDTHS = {EXT8: 8, EXT16: 16, EXT32: 32}

# fixext: tag -> implied data length, and the reverse for the encoder
FIXEXT_LENGTHS = {FIXEXT1: 1, FIXEXT2: 2, FIXEXT4: 4, FIXEXT8: 8, FIXEXT16: 16}
FIXEXT_TAGS = {length: tag for tag, length in FIXEXT_LENGTHS.items()}

UINT64_MAX = 0xFFFFFFFFFFFFFFFF
INT64_MIN = -0x8000000000000000
INT8_MIN = -0x80
INT8_MAX = 0x7F
LENGTH32_MAX = 0xFFFFFFFF

# Structs, keyed by bit width
UINT_STRUCTS = {8: Struct(">B"), 16: Struct(">H"), 32: Struct(">I"), 64: Struct(">Q")}
INT_STRUCTS = {8: Struct(">b"), 16: Struct(">h"), 32: Struct(">i"), 64: Struct(">q")}
FLOAT32_STRUCT = Struct(">f")
FLOAT64_STRUCT = Struct(">d")
