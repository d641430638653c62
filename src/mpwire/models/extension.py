"""Extension value model.

MessagePack extension values pair an application-defined signed 8-bit type id
with an opaque payload. The decoder returns them as Extension instances and
the encoder accepts them back through Encoder.put_extension().
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Extension(BaseModel):
    """A decoded MessagePack extension value.

    ``data`` is a view aliasing the decoded buffer unless the decoder was
    configured with ``copy_payloads=True``.

    Example:
        >>> ext = Extension(type_id=-1, data=memoryview(b"\\x00\\x00\\x00\\x01"))
        >>> ext.type_id
        -1
    """

    model_config = ConfigDict(
        frozen=True,
        # memoryview has no pydantic schema of its own
        arbitrary_types_allowed=True,
    )

    type_id: int = Field(ge=-128, le=127)
    data: memoryview

    @field_validator("data", mode="before")
    @classmethod
    def wrap_bytes_payload(cls, value: Any) -> Any:
        """Accept bytes and bytearray payloads as byte views."""
        if isinstance(value, (bytes, bytearray)):
            return memoryview(value)
        if isinstance(value, memoryview):
            return value.cast("B")
        return value

    def to_bytes(self) -> bytes:
        """Return an owned copy of the payload."""
        return bytes(self.data)
