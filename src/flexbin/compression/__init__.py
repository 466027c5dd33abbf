"""Compression strategies for flexbin envelopes."""

from __future__ import annotations

from .strategy import (
    Compression,
    CompressionSpec,
    CompressionType,
    NoCompression,
    ZlibCompression,
    resolve_compression,
)

__all__ = [
    "CompressionType",
    "Compression",
    "CompressionSpec",
    "NoCompression",
    "ZlibCompression",
    "resolve_compression",
]
