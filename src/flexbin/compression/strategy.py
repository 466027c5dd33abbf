"""Compression strategies for the envelope body.

Design Pattern: Strategy Pattern
- Compression: Abstract interface used symmetrically on encode and decode
- NoCompression: Identity transform
- ZlibCompression: Deflate stream with zlib header and checksum

A CompressionType selector is resolved once into a strategy instance; strategies
hold no per-call state, so one instance can serve any number of callers.
"""

from __future__ import annotations

import enum
import zlib
from abc import ABC, abstractmethod
from typing import Union

from ..exceptions import CompressionFailed, DecompressionFailed


class CompressionType(enum.Enum):
    """Compression selector."""

    NONE = "none"
    ZLIB = "zlib"


class Compression(ABC):
    """Abstract byte-stream transform.

    Implementations must satisfy ``decompress(compress(x)) == x`` for every
    byte sequence ``x``.
    """

    @property
    @abstractmethod
    def compression_type(self) -> CompressionType:
        """Selector this strategy was resolved from."""

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        """Compress data.

        Raises:
            CompressionFailed: If the compressor rejects the input
        """

    @abstractmethod
    def decompress(self, data: bytes) -> bytes:
        """Decompress data.

        Raises:
            DecompressionFailed: If data is malformed or truncated
        """

    @staticmethod
    def new(compression_type: CompressionType) -> Compression:
        """Resolve a selector into a strategy instance."""
        return resolve_compression(compression_type)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NoCompression(Compression):
    """Identity copy in both directions."""

    @property
    def compression_type(self) -> CompressionType:
        return CompressionType.NONE

    def compress(self, data: bytes) -> bytes:
        return bytes(data)

    def decompress(self, data: bytes) -> bytes:
        return bytes(data)


class ZlibCompression(Compression):
    """Deflate compression in the zlib container format.

    Args:
        level: zlib compression level, -1 (default) or 0-9

    Example:
        >>> strategy = ZlibCompression()
        >>> strategy.decompress(strategy.compress(b"abc" * 100))
        b'abcabc...'
    """

    def __init__(self, level: int = zlib.Z_DEFAULT_COMPRESSION) -> None:
        if level != zlib.Z_DEFAULT_COMPRESSION and not 0 <= level <= 9:
            raise ValueError(f"zlib level must be -1 or 0-9, got {level}")
        self._level = level

    @property
    def compression_type(self) -> CompressionType:
        return CompressionType.ZLIB

    @property
    def level(self) -> int:
        return self._level

    def compress(self, data: bytes) -> bytes:
        try:
            return zlib.compress(bytes(data), self._level)
        except zlib.error as e:
            raise CompressionFailed(f"zlib compression failed: {e}") from e

    def decompress(self, data: bytes) -> bytes:
        decompressor = zlib.decompressobj()
        try:
            result = decompressor.decompress(bytes(data))
            result += decompressor.flush()
        except zlib.error as e:
            raise DecompressionFailed(f"zlib decompression failed: {e}") from e

        if not decompressor.eof:
            raise DecompressionFailed("zlib stream is truncated")
        if decompressor.unused_data:
            raise DecompressionFailed(
                f"{len(decompressor.unused_data)} trailing bytes after zlib stream"
            )
        return result

    def __repr__(self) -> str:
        return f"ZlibCompression(level={self._level})"


CompressionSpec = Union[CompressionType, Compression]


def resolve_compression(compression_type: CompressionSpec) -> Compression:
    """Resolve a CompressionType selector into a strategy instance.

    Compression instances are returned unchanged.

    Args:
        compression_type: Selector (or strategy) to resolve

    Returns:
        Stateless Compression strategy

    Raises:
        ValueError: If the selector is not a CompressionType
    """
    if isinstance(compression_type, Compression):
        return compression_type
    if compression_type is CompressionType.NONE:
        return NoCompression()
    if compression_type is CompressionType.ZLIB:
        return ZlibCompression()
    raise ValueError(f"Invalid compression type: {compression_type!r}")
