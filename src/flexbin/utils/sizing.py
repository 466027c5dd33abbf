"""Envelope size calculation utilities.

This module provides functions to calculate encoded sizes and the fixed
overhead of the security layers without building an envelope.
"""

from __future__ import annotations

from typing import Any

from ..codec.encoder import encode_schema, encode_value
from ..codec.schema import Schema
from ..security import GCM_TAG_SIZE, NONCE_SIZE, SIGNATURE_SIZE, SecurityOptions


def envelope_overhead(options: SecurityOptions) -> int:
    """Calculate the bytes added by encryption and signing.

    Args:
        options: Security options of the serializer

    Returns:
        Overhead in bytes (nonce + GCM tag when encrypting, HMAC tag when signing)

    Example:
        >>> envelope_overhead(SecurityOptions(enable_encryption=True))
        28
    """
    overhead = 0
    if options.enable_encryption:
        overhead += NONCE_SIZE + GCM_TAG_SIZE
    if options.enable_signing:
        overhead += SIGNATURE_SIZE
    return overhead


def encoded_size(schema: Schema, value: Any) -> int:
    """Calculate the uncompressed size of schema plus value.

    This is the exact envelope size when compression and security are off.

    Raises:
        SchemaError: If the schema is invalid
        EncodeError: If the value does not match the schema
    """
    return len(encode_schema(schema)) + len(encode_value(schema, value))
