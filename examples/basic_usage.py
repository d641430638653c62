#!/usr/bin/env python3
"""Basic usage example for mpwire.

This example demonstrates:
1. Writing a record as a MessagePack map with Encoder
2. Reading it back field by field with Decoder
3. Handling optional (nil) fields with check_nil()
4. Forwarding an unread remainder with dump(rest)
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from mpwire import BadTypeError, Decoder, Encoder


class StatusReport(BaseModel):
    """Vehicle status report."""

    vehicle_id: int = Field(ge=0, le=255)
    depth_m: float
    label: str | None = None
    active: bool


def write_report(enc: Encoder, report: StatusReport) -> None:
    """Write a report as a 4-entry map keyed by field name."""
    enc.put_map(4)
    enc.put_string("vehicle_id")
    enc.put_int(report.vehicle_id)
    enc.put_string("depth_m")
    enc.put_float64(report.depth_m)
    enc.put_string("label")
    if report.label is None:
        enc.put_nil()
    else:
        enc.put_string(report.label)
    enc.put_string("active")
    enc.put_bool(report.active)


def read_report(dec: Decoder) -> StatusReport:
    """Read a report written by write_report()."""
    fields: dict[str, object] = {}
    for _ in range(dec.expected_map()):
        key = dec.expected_string()
        if key == "vehicle_id":
            fields[key] = dec.expected_integer()
        elif key == "depth_m":
            fields[key] = dec.expected_number()
        elif key == "label":
            fields[key] = None if dec.check_nil() else dec.expected_string()
        elif key == "active":
            fields[key] = dec.expected_bool()
    return StatusReport.model_validate(fields)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("mpwire Basic Usage Example")
    print("=" * 60)
    print()

    report = StatusReport(vehicle_id=42, depth_m=25.5, active=True)

    print("1. Encoding a status report...")
    enc = Encoder()
    write_report(enc, report)
    enc.put_binary(b"\x01\x02\x03")  # trailing payload for step 4
    data = enc.dump()
    print(f"   {len(data)} bytes: {data.hex()}")
    print()

    print("2. Decoding it back...")
    dec = Decoder(data)
    decoded = read_report(dec)
    print(f"   {decoded}")
    print()

    print("3. A mismatched read leaves the cursor in place...")
    before = dec.position
    try:
        dec.expected_string()
    except BadTypeError as err:
        print(f"   {err} (position still {dec.position}, was {before})")
    print()

    print("4. Forwarding the unread remainder behind a new header...")
    forward = Encoder()
    forward.put_int(7)
    forwarded = forward.dump(dec.get_rest())
    print(f"   {forwarded.hex()}")
    print()


if __name__ == "__main__":
    main()
