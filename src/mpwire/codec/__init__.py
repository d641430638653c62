"""MessagePack codec for mpwire.

This module provides the byte cursor, the caller-driven decoder and the
minimal-width encoder.
"""

from __future__ import annotations

from .cursor import ByteCursor
from .decoder import Decoder
from .encoder import Encoder

__all__ = [
    "ByteCursor",
    "Decoder",
    "Encoder",
]
