"""Configuration for decode sessions.

This module provides the DecoderConfig dataclass that controls how string and
byte payloads are materialized by the Decoder.
"""

from __future__ import annotations

from dataclasses import dataclass

UNICODE_ERROR_MODES = ("strict", "replace")


@dataclass
class DecoderConfig:
    """Options for a Decoder.

    Attributes:
        unicode_errors: How malformed UTF-8 in string payloads is handled.
            - "strict" (default): raise InvalidUtf8Error
            - "replace": substitute U+FFFD for each malformed sequence
            Payloads are never truncated in either mode.

        copy_payloads: If True, binary and extension data are copied into owned
            buffers. By default they are views aliasing the input buffer, which
            must then stay unchanged while the views are in use.

    Example:
        ```python
        from mpwire import Decoder, DecoderConfig

        dec = Decoder(data, DecoderConfig(unicode_errors="replace", copy_payloads=True))
        ```
    """

    unicode_errors: str = "strict"
    copy_payloads: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.unicode_errors not in UNICODE_ERROR_MODES:
            raise ValueError(
                f"unicode_errors must be one of {', '.join(UNICODE_ERROR_MODES)}, "
                f"got {self.unicode_errors!r}"
            )
