"""Envelope construction and parsing.

This module provides the serializer/deserializer pair and the signature
trailer framing they use.
"""

from __future__ import annotations

from .deserializer import FlexBinDeserializer
from .framing import frame_signed, unframe_signed
from .serializer import FlexBinSerializer

__all__ = [
    "FlexBinSerializer",
    "FlexBinDeserializer",
    "frame_signed",
    "unframe_signed",
]
