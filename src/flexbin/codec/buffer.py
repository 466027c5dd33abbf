"""Byte-level writing and reading utilities.

This module provides the cursor-based primitives behind the standard value
encoding. All multi-byte values are big-endian, and every primitive is
self-delimiting: a reader consumes exactly the bytes a writer produced.
"""

from __future__ import annotations

import struct

_U8 = struct.Struct(">B")
_U32 = struct.Struct(">I")
_I64 = struct.Struct(">q")
_F64 = struct.Struct(">d")

U32_MAX = 0xFFFFFFFF
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


class ByteWriter:
    """Appends encoded primitives to a growing byte buffer.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_bool(True)
        >>> writer.write_u32(42)
        >>> writer.write_str("Ada")
        >>> data = writer.to_bytes()
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write_u8(self, value: int) -> None:
        """Write an unsigned 8-bit integer.

        Raises:
            ValueError: If value is outside 0-255
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"u8 value out of range: {value}")
        self._buffer += _U8.pack(value)

    def write_u32(self, value: int) -> None:
        """Write an unsigned 32-bit integer.

        Raises:
            ValueError: If value is outside 0-4294967295
        """
        if not 0 <= value <= U32_MAX:
            raise ValueError(f"u32 value out of range: {value}")
        self._buffer += _U32.pack(value)

    def write_i64(self, value: int) -> None:
        """Write a signed 64-bit integer (two's complement).

        Raises:
            ValueError: If value doesn't fit in 64 bits
        """
        if not I64_MIN <= value <= I64_MAX:
            raise ValueError(f"Value {value} doesn't fit in a signed 64-bit integer")
        self._buffer += _I64.pack(value)

    def write_f64(self, value: float) -> None:
        """Write an IEEE-754 double."""
        self._buffer += _F64.pack(value)

    def write_bool(self, value: bool) -> None:
        """Write a boolean as a single 0x00/0x01 byte."""
        self._buffer.append(1 if value else 0)

    def write_bytes(self, data: bytes) -> None:
        """Write a u32 length prefix followed by the raw bytes."""
        self.write_u32(len(data))
        self._buffer += data

    def write_str(self, value: str) -> None:
        """Write a string as length-prefixed UTF-8."""
        self.write_bytes(value.encode("utf-8"))

    def __len__(self) -> int:
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._buffer)


class ByteReader:
    """Reads encoded primitives from a byte buffer, advancing a cursor.

    Every read raises IndexError when the buffer holds fewer bytes than the
    primitive needs; callers translate that into a DecodeError.

    Example:
        >>> reader = ByteReader(data)
        >>> flag = reader.read_bool()
        >>> count = reader.read_u32()
        >>> name = reader.read_str()
    """

    def __init__(self, data: bytes) -> None:
        """Initialize a reader positioned at the start of data."""
        self._data = memoryview(bytes(data))
        self._position = 0

    def _take(self, size: int) -> memoryview:
        if self._position + size > len(self._data):
            raise IndexError(
                f"Not enough bytes: need {size}, have {len(self._data) - self._position}"
            )
        chunk = self._data[self._position : self._position + size]
        self._position += size
        return chunk

    def read_u8(self) -> int:
        return _U8.unpack(self._take(1))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self._take(4))[0]

    def read_i64(self) -> int:
        return _I64.unpack(self._take(8))[0]

    def read_f64(self) -> float:
        return _F64.unpack(self._take(8))[0]

    def read_bool(self) -> bool:
        """Read a boolean byte.

        Raises:
            ValueError: If the byte is neither 0x00 nor 0x01
            IndexError: If no bytes remain
        """
        raw = self.read_u8()
        if raw > 1:
            raise ValueError(f"Invalid boolean byte 0x{raw:02x}")
        return raw == 1

    def read_bytes(self) -> bytes:
        """Read a u32 length prefix and that many raw bytes."""
        size = self.read_u32()
        return bytes(self._take(size))

    def read_str(self) -> str:
        """Read length-prefixed UTF-8.

        Raises:
            UnicodeDecodeError: If the bytes are not valid UTF-8
        """
        return self.read_bytes().decode("utf-8")

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def position(self) -> int:
        """Return the current read position in bytes."""
        return self._position
