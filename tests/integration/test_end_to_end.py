"""End-to-end tests: caller-driven encode sessions decoded back."""

from __future__ import annotations

import struct

import pytest

from mpwire import BadTypeError, Decoder, DecoderConfig, Encoder


class TestBoundaryRoundTrip:
    """Round-trip every size-class boundary in a single stream."""

    def test_integers(self, encoder: Encoder, integer_boundaries: list[int]) -> None:
        """Test boundary integers written back to back."""
        encoder.put_array(len(integer_boundaries))
        for value in integer_boundaries:
            encoder.put_int(value)

        dec = Decoder(encoder.dump())
        count = dec.expected_array()
        assert [dec.expected_integer() for _ in range(count)] == integer_boundaries
        assert dec.remaining == 0

    @pytest.mark.parametrize("value", [0.5, -0.5])
    def test_floats_bit_exact(self, encoder: Encoder, value: float) -> None:
        """Test float32 and float64 round-trips."""
        encoder.put_float32(value)
        encoder.put_float64(value)
        dec = Decoder(encoder.dump())

        as32 = dec.expected_number()
        as64 = dec.expected_number()
        assert struct.pack(">f", as32) == struct.pack(">f", value)
        assert struct.pack(">d", as64) == struct.pack(">d", value)

    def test_strings(self, encoder: Encoder) -> None:
        """Test fixstr/str8 boundary and multi-byte text."""
        values = ["", "a", "s" * 32, "t" * 33, "汉字"]
        for value in values:
            encoder.put_string(value)

        data = encoder.dump()
        dec = Decoder(data)
        assert [dec.expected_string() for _ in values] == values
        # 32 bytes no longer fits inline
        assert b"\xd9\x20" + b"s" * 32 in data

    def test_binary(self, encoder: Encoder) -> None:
        """Test bin8 to bin16 boundary."""
        values = [b"", b"\x01\x02\x03", bytes(range(40)), bytes(range(200)) * 2]
        for value in values:
            encoder.put_binary(value)

        dec = Decoder(encoder.dump())
        assert [bytes(dec.expected_binary()) for _ in values] == values

    @pytest.mark.parametrize("count", [0, 1, 15, 16, 65535, 65536])
    def test_collection_headers(self, encoder: Encoder, count: int) -> None:
        """Test fix/16/32 header boundaries for both collections."""
        encoder.put_array(count)
        encoder.put_map(count)
        dec = Decoder(encoder.dump())

        assert dec.expected_array() == count
        assert dec.expected_map() == count

    @pytest.mark.parametrize("length", [1, 2, 4, 8, 16, 3, 255, 256, 70000])
    def test_extensions(self, encoder: Encoder, length: int) -> None:
        """Test fixext lengths and variable lengths across 255/256."""
        payload = bytes(i % 251 for i in range(length))
        encoder.put_ext(-7, payload)
        encoder.put_nil()
        dec = Decoder(encoder.dump())

        ext = dec.expected_extension()
        assert ext.type_id == -7
        assert ext.to_bytes() == payload
        assert dec.check_nil() is True


class TestScenarios:
    """Concrete byte-level scenarios."""

    def test_array_of_string(self, encoder: Encoder) -> None:
        """Test [array(1), "a"] bytes and decode."""
        encoder.put_array(1)
        encoder.put_string("a")
        data = encoder.dump()
        assert data == b"\x91\xa1\x61"

        dec = Decoder(data)
        assert (dec.expected_array(), dec.expected_string()) == (1, "a")

    def test_int32_minimum(self, encoder: Encoder) -> None:
        """Test the most negative int32."""
        encoder.put_int(-2147483648)
        data = encoder.dump()
        assert data == b"\xd2\x80\x00\x00\x00"
        assert Decoder(data).expected_integer() == -2147483648

    def test_record_with_optional_fields(self, encoder: Encoder) -> None:
        """Test a map whose values may be nil."""
        encoder.put_map(3)
        encoder.put_string("id")
        encoder.put_int(42)
        encoder.put_string("name")
        encoder.put_nil()
        encoder.put_string("tags")
        encoder.put_array(2)
        encoder.put_string("x")
        encoder.put_bool(False)

        dec = Decoder(encoder.dump())
        record: dict[str, object] = {}
        for _ in range(dec.expected_map()):
            key = dec.expected_string()
            if dec.check_nil():
                record[key] = None
            elif key == "tags":
                assert dec.expected_array() == 2
                record[key] = [dec.expected_string(), dec.expected_bool()]
            else:
                record[key] = dec.expected_integer()

        assert record == {"id": 42, "name": None, "tags": ["x", False]}
        assert dec.remaining == 0

    def test_speculative_decode(self, encoder: Encoder) -> None:
        """Test trying kinds in turn until one matches."""
        encoder.put_float64(1.25)
        encoder.put_binary(b"\xde\xad")
        encoder.put_string("done")

        dec = Decoder(encoder.dump())
        readers = (dec.expected_string, dec.expected_binary, dec.expected_number)
        results = []
        while dec.remaining:
            for reader in readers:
                try:
                    value = reader()
                except BadTypeError:
                    continue
                results.append(bytes(value) if isinstance(value, memoryview) else value)
                break

        assert results == [1.25, b"\xde\xad", "done"]


class TestForwarding:
    """Re-emit a partially decoded stream."""

    def test_forward_unparsed_remainder(self) -> None:
        """Test replacing a header and appending the untouched rest."""
        upstream = Encoder()
        upstream.put_int(1)  # routing hop count
        upstream.put_map(1)
        upstream.put_string("k")
        upstream.put_binary(b"v" * 300)

        dec = Decoder(upstream.dump())
        hops = dec.expected_integer()

        downstream = Encoder()
        downstream.put_int(hops + 1)
        forwarded = downstream.dump(dec.get_rest())

        out = Decoder(forwarded)
        assert out.expected_integer() == 2
        assert out.expected_map() == 1
        assert out.expected_string() == "k"
        assert bytes(out.expected_binary()) == b"v" * 300

    def test_forward_extension(self) -> None:
        """Test that a decoded extension re-encodes identically."""
        source = Encoder()
        source.put_ext(12, b"\x00" * 20)
        data = source.dump()

        ext = Decoder(data, DecoderConfig(copy_payloads=True)).expected_extension()
        sink = Encoder()
        sink.put_extension(ext)
        assert sink.dump() == data
