"""Envelope serializer.

This module provides FlexBinSerializer, which turns a value into a
self-describing envelope:

    encode value -> prepend schema -> compress -> [encrypt] -> [sign]

The schema always precedes the payload; FlexBinDeserializer relies on that order.
"""

from __future__ import annotations

from typing import Any, Optional, Type

from pydantic import BaseModel

from ..codec.encoder import encode_schema, encode_value
from ..codec.schema import Schema
from ..compression import Compression, CompressionSpec, CompressionType, resolve_compression
from ..exceptions import (
    EncryptionKeyMissing,
    FlexBinError,
    SchemaError,
    SerializeError,
    SigningKeyMissing,
)
from ..security import SecurityOptions, encrypt
from ..utils.log import get_logger
from .framing import frame_signed

logger = get_logger("envelope.serializer")


class FlexBinSerializer:
    """Builds envelopes for values of one fixed Schema.

    The schema, compression strategy and security options are fixed at
    construction and never mutated, so one instance can be shared by any
    number of threads.

    Args:
        schema: Schema of every value this serializer encodes
        compression: CompressionType selector or a Compression instance
        security_options: Encryption/signing switches and keys

    Example:
        ```python
        from flexbin import INTEGER, STRING, CompressionType, FlexBinSerializer, Schema

        schema = Schema.new([("name", STRING), ("age", INTEGER)])
        serializer = FlexBinSerializer(schema, CompressionType.ZLIB)
        data = serializer.serialize({"name": "Ada", "age": 30})
        ```
    """

    def __init__(
        self,
        schema: Schema,
        compression: CompressionSpec = CompressionType.NONE,
        security_options: Optional[SecurityOptions] = None,
    ) -> None:
        if not isinstance(schema, Schema):
            raise SchemaError(f"Expected a Schema, got {type(schema).__name__}")
        self._schema = schema
        self._compression = resolve_compression(compression)
        self._security = security_options if security_options is not None else SecurityOptions()

    @classmethod
    def for_model(
        cls,
        model_class: Type[BaseModel],
        compression: CompressionSpec = CompressionType.NONE,
        security_options: Optional[SecurityOptions] = None,
    ) -> FlexBinSerializer:
        """Create a serializer whose schema is introspected from a Pydantic model."""
        return cls(Schema.from_model(model_class), compression, security_options)

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def compression(self) -> Compression:
        return self._compression

    @property
    def security_options(self) -> SecurityOptions:
        return self._security

    def serialize(self, value: Any) -> bytes:
        """Serialize value into an envelope.

        Args:
            value: Mapping or Pydantic model instance matching the schema

        Returns:
            Envelope bytes

        Raises:
            SerializeError: Wrapping the originating error in ``cause``:
                EncodeError, SchemaError, CompressionFailed,
                EncryptionKeyMissing, EncryptionFailed, SigningKeyMissing
                or SigningFailed
        """
        try:
            return self._serialize(value)
        except FlexBinError as e:
            logger.debug("serialize failed: %s: %s", type(e).__name__, e)
            raise SerializeError(e) from e

    def _serialize(self, value: Any) -> bytes:
        schema_bytes = encode_schema(self._schema)
        value_bytes = encode_value(self._schema, value)
        plain = schema_bytes + value_bytes

        body = self._compression.compress(plain)
        logger.debug(
            "encoded schema=%d value=%d compressed=%d (%s)",
            len(schema_bytes),
            len(value_bytes),
            len(body),
            self._compression.compression_type.value,
        )

        if self._security.enable_encryption:
            if self._security.encryption_key is None:
                raise EncryptionKeyMissing("Encryption enabled but no encryption key supplied")
            body = encrypt(body, self._security.encryption_key)
            logger.debug("encrypted envelope body to %d bytes", len(body))

        if self._security.enable_signing:
            if self._security.signing_key is None:
                raise SigningKeyMissing("Signing enabled but no signing key supplied")
            body = frame_signed(body, self._security.signing_key)

        return body

    def __repr__(self) -> str:
        return (
            f"FlexBinSerializer(schema={self._schema!r}, compression={self._compression!r}, "
            f"encryption={self._security.enable_encryption}, "
            f"signing={self._security.enable_signing})"
        )
