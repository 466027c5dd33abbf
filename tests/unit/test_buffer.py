"""Unit tests for byte writer/reader utilities."""

from __future__ import annotations

import pytest

from flexbin.codec.buffer import I64_MAX, I64_MIN, ByteReader, ByteWriter


class TestByteWriter:
    """Test ByteWriter functionality."""

    def test_write_u8_and_bool(self) -> None:
        """Test single-byte primitives."""
        writer = ByteWriter()
        writer.write_u8(0xAB)
        writer.write_bool(True)
        writer.write_bool(False)

        assert len(writer) == 3
        assert writer.to_bytes() == b"\xab\x01\x00"

    def test_write_u32_big_endian(self) -> None:
        """Test u32 is big-endian."""
        writer = ByteWriter()
        writer.write_u32(42)
        assert writer.to_bytes() == b"\x00\x00\x00\x2a"

    def test_write_i64(self) -> None:
        """Test signed 64-bit integers use two's complement."""
        writer = ByteWriter()
        writer.write_i64(-1)
        writer.write_i64(1)

        assert writer.to_bytes() == b"\xff" * 8 + b"\x00" * 7 + b"\x01"

    def test_write_str_length_prefixed(self) -> None:
        """Test strings are length-prefixed UTF-8."""
        writer = ByteWriter()
        writer.write_str("Ada")
        assert writer.to_bytes() == b"\x00\x00\x00\x03Ada"

    def test_write_bounds(self) -> None:
        """Test range checking."""
        writer = ByteWriter()

        # Valid values
        writer.write_u8(0)
        writer.write_u8(255)
        writer.write_i64(I64_MIN)
        writer.write_i64(I64_MAX)

        # Out of bounds
        with pytest.raises(ValueError, match="u8"):
            writer.write_u8(256)

        with pytest.raises(ValueError, match="u32"):
            writer.write_u32(-1)

        with pytest.raises(ValueError, match="64-bit"):
            writer.write_i64(I64_MAX + 1)


class TestByteReader:
    """Test ByteReader functionality."""

    def test_read_back(self) -> None:
        """Test reading every primitive written by ByteWriter."""
        writer = ByteWriter()
        writer.write_u8(7)
        writer.write_u32(123456)
        writer.write_i64(-42)
        writer.write_f64(2.5)
        writer.write_bool(True)
        writer.write_str("héllo")
        writer.write_bytes(b"\x00\x01")

        reader = ByteReader(writer.to_bytes())
        assert reader.read_u8() == 7
        assert reader.read_u32() == 123456
        assert reader.read_i64() == -42
        assert reader.read_f64() == 2.5
        assert reader.read_bool() is True
        assert reader.read_str() == "héllo"
        assert reader.read_bytes() == b"\x00\x01"
        assert reader.remaining() == 0

    def test_position_tracking(self) -> None:
        """Test cursor position advances by exactly the bytes consumed."""
        reader = ByteReader(b"\x00\x00\x00\x01\xff")
        assert reader.position() == 0

        reader.read_u32()
        assert reader.position() == 4
        assert reader.remaining() == 1

    def test_read_past_end(self) -> None:
        """Test truncated reads raise IndexError."""
        reader = ByteReader(b"\x00\x00")

        with pytest.raises(IndexError, match="Not enough bytes"):
            reader.read_u32()

    def test_truncated_string(self) -> None:
        """Test a length prefix longer than the data."""
        reader = ByteReader(b"\x00\x00\x00\x10abc")

        with pytest.raises(IndexError):
            reader.read_str()

    def test_invalid_bool(self) -> None:
        """Test boolean bytes other than 0/1 are rejected."""
        reader = ByteReader(b"\x02")

        with pytest.raises(ValueError, match="Invalid boolean"):
            reader.read_bool()
