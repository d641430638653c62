"""Value models returned by the decoder."""

from __future__ import annotations

from .extension import Extension

__all__ = ["Extension"]
